"""Statement option construction utilities.

This module translates CLI arguments into the ExtensionOption list a
CREATE/ALTER EXTENSION statement would carry. Dedicated flags (`--schema`,
`--new-version`, `--old-version`) are appended after raw `--option`
entries, so they win when both name the same option.
"""

from typing import Iterable

from extops.core.models import (
    OPT_NEW_VERSION,
    OPT_OLD_VERSION,
    OPT_SCHEMA,
    ExtensionOption,
)


def parse_statement_option(raw: str) -> ExtensionOption:
    """
    Parse `name=value` (or a bare `name` flag) into an ExtensionOption.

    Raises:
        ValueError: If the option name is empty.
    """
    if "=" in raw:
        name, value = raw.split("=", 1)
        name = name.strip()
    else:
        name, value = raw.strip(), None
    if not name:
        raise ValueError(f"Invalid statement option: '{raw}' (expected name=value)")
    return ExtensionOption(name=name, value=value)


def build_statement_options(
    *,
    raw: Iterable[str],
    schema: str | None,
    new_version: str | None,
    old_version: str | None,
) -> list[ExtensionOption]:
    """Combine raw `--option` values and dedicated flags into one option list."""
    options = [parse_statement_option(r) for r in raw]
    if schema is not None:
        options.append(ExtensionOption(OPT_SCHEMA, schema))
    if new_version is not None:
        options.append(ExtensionOption(OPT_NEW_VERSION, new_version))
    if old_version is not None:
        options.append(ExtensionOption(OPT_OLD_VERSION, old_version))
    return options
