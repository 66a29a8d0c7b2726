"""Core domain models for extension property resolution.

These models represent statement options, control files, catalog entries
and resolution results in a simple, immutable form. They are intentionally
free of database driver types and UI/CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

OPT_SCHEMA = "schema"
OPT_OLD_VERSION = "old_version"
OPT_NEW_VERSION = "new_version"

KNOWN_OPTIONS = (OPT_SCHEMA, OPT_OLD_VERSION, OPT_NEW_VERSION)


@dataclass(frozen=True)
class ExtensionOption:
    """
    A single option of a CREATE/ALTER EXTENSION statement.

    Attributes:
        name: Option name (for example `schema` or `new_version`).
        value: Literal value, or None for a flag-only option.
    """

    name: str
    value: str | None = None


@dataclass(frozen=True)
class ControlFile:
    """
    Parsed contents of an extension control file.

    Attributes:
        extname: Extension the file belongs to.
        path: Location the file was read from.
        entries: Key/value pairs, first assignment of each key retained.
    """

    extname: str
    path: Path
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, key: str) -> str | None:
        """Return the value for `key`, or None if the file does not set it."""
        return self.entries.get(key)

    @property
    def default_version(self) -> str | None:
        return self.get("default_version")

    @property
    def schema(self) -> str | None:
        return self.get("schema")

    @property
    def comment(self) -> str | None:
        return self.get("comment")

    @property
    def module_pathname(self) -> str | None:
        return self.get("module_pathname")

    @property
    def directory(self) -> str | None:
        return self.get("directory")

    @property
    def encoding(self) -> str | None:
        return self.get("encoding")

    @property
    def relocatable(self) -> bool:
        return _parse_bool(self.get("relocatable"))

    @property
    def superuser(self) -> bool:
        # the host database treats a missing `superuser` key as true
        raw = self.get("superuser")
        return True if raw is None else _parse_bool(raw)

    @property
    def requires(self) -> list[str]:
        raw = self.get("requires") or ""
        return [r.strip() for r in raw.split(",") if r.strip()]


@dataclass(frozen=True)
class CatalogEntry:
    """Lightweight representation of one installed-extensions catalog row."""

    name: str
    version: str | None
    schema: str | None = None


@dataclass(frozen=True)
class ResolvedProperties:
    """
    Effective parameters of an extension install or upgrade.

    Attributes:
        schema: Target schema, always set after a successful resolution.
        new_version: Version to install or upgrade to, always set.
        old_version: Version upgraded from; only set for upgrade flows.
    """

    schema: str
    new_version: str
    old_version: str | None = None


class PlanAction(str, Enum):
    """Kind of extension operation a plan describes."""

    INSTALL = "INSTALL"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class ExtensionPlan:
    """Resolved install or update of a single extension."""

    extname: str
    action: PlanAction
    properties: ResolvedProperties

    @property
    def is_noop(self) -> bool:
        """True for an update whose source and target versions are equal."""
        return (
            self.action is PlanAction.UPDATE
            and self.properties.old_version == self.properties.new_version
        )


def _parse_bool(raw: str | None) -> bool:
    """Interpret a boolean setting the way the host configuration files do."""
    if raw is None:
        return False
    return raw.strip().lower() in {"on", "true", "t", "yes", "y", "1"}
