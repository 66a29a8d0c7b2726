"""Extension property resolution.

This module merges the three sources that decide where and at which
version an extension gets installed or upgraded:

1. explicit statement options (`schema`, `old_version`, `new_version`),
2. the extension's primary control file (`schema`, `default_version`),
3. the search path (first entry), for the schema only.

An explicit option always wins; the control file only fills in what the
statement left out, and the search path is consulted last. The current
installed version is never looked up here: callers planning an upgrade
fetch it from the catalog and pass it in as `old_version`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from extops.core.errors import MissingDefaultVersion
from extops.core.models import (
    KNOWN_OPTIONS,
    OPT_NEW_VERSION,
    OPT_OLD_VERSION,
    OPT_SCHEMA,
    ControlFile,
    ExtensionOption,
    ResolvedProperties,
)
from extops.core.search_path import SearchPathAdapter, default_schema

log = logging.getLogger(__name__)


class ControlFileSource(Protocol):
    """Interface for reading extension control files."""

    def read(self, extname: str, version: str | None = None) -> ControlFile:
        """Return the primary (or per-version auxiliary) control file."""
        ...


def scan_options(options: Iterable[ExtensionOption]) -> dict[str, str | None]:
    """
    Extract `schema`, `old_version` and `new_version` from statement options.

    The last occurrence of each name decides; a flag-only occurrence (no
    value) or an empty value counts as absent. Other option names are
    ignored, never rejected: validating them is left to the statement's own
    handling.
    """
    last: dict[str, ExtensionOption] = {}
    for opt in options:
        if opt.name in KNOWN_OPTIONS:
            last[opt.name] = opt
    return {
        name: ((last[name].value or None) if name in last else None)
        for name in KNOWN_OPTIONS
    }


def resolve_properties(
    extname: str,
    options: Iterable[ExtensionOption],
    *,
    control_reader: ControlFileSource,
    search_path: SearchPathAdapter,
) -> ResolvedProperties:
    """
    Resolve the effective schema and versions of an extension statement.

    Args:
        extname: Extension name.
        options: Statement options; only `schema`, `old_version` and
            `new_version` are considered.
        control_reader: Source of the extension's control file, read only
            when the schema or the new version is not given explicitly.
        search_path: Source of the search path, fetched only when neither
            the options nor the control file name a schema.

    Returns:
        ResolvedProperties with `schema` and `new_version` set and
        `old_version` passed through from the options.

    Raises:
        ControlFileNotFound: If the control file is needed but missing.
        ControlFileSyntaxError: If the control file is needed but invalid.
        MissingDefaultVersion: If no version is given and the control file
            has no `default_version`.
        NoSchemaSelected: If the search path yields no usable schema.
    """
    if not extname:
        raise ValueError("Extension name must not be empty.")

    explicit = scan_options(options)
    schema = explicit[OPT_SCHEMA]
    old_version = explicit[OPT_OLD_VERSION]
    new_version = explicit[OPT_NEW_VERSION]

    if new_version is None or schema is None:
        control = control_reader.read(extname)
        if new_version is None:
            new_version = control.default_version or None
        if schema is None:
            schema = control.schema or None
        log.debug(
            "control file %s: new_version=%s schema=%s",
            control.path,
            new_version,
            schema,
        )

    if not new_version:
        raise MissingDefaultVersion(extname)

    if not schema:
        schema = default_schema(search_path.fetch_search_path())
        log.debug("schema for %s taken from search path: %s", extname, schema)

    return ResolvedProperties(
        schema=schema,
        new_version=new_version,
        old_version=old_version,
    )
