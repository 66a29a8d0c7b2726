"""Extension whitelist handling.

The whitelist is configured as a comma-separated list of extension names
(the `extwlist.extensions` setting). Only listed extensions may be
installed or upgraded through the whitelisting path.
"""

from __future__ import annotations

from dataclasses import dataclass

from extops.core.errors import ExtensionNotWhitelisted


@dataclass(frozen=True)
class Whitelist:
    """Set of extension names that may be installed."""

    names: frozenset[str]

    @classmethod
    def from_setting(cls, text: str | None) -> Whitelist:
        """Parse a comma-separated setting value; empty items are dropped."""
        names = set()
        for item in (text or "").split(","):
            name = item.strip()
            if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
                name = name[1:-1]
            if name:
                names.add(name)
        return cls(names=frozenset(names))

    def allows(self, extname: str) -> bool:
        return extname in self.names


def check_allowed(whitelist: Whitelist | None, extname: str) -> None:
    """
    Raise if `extname` is not whitelisted.

    A whitelist of None means whitelisting is not configured and every
    extension is allowed.
    """
    if whitelist is None:
        return
    if not whitelist.allows(extname):
        raise ExtensionNotWhitelisted(extname)
