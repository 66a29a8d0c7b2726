"""Installed-extension catalog lookups.

At upgrade time the statement usually doesn't say which version is being
upgraded from; it has to be fetched from the catalog. The functions here
take an adapter so the core stays free of any database driver.
"""

from __future__ import annotations

import logging
from typing import Protocol

from extops.core.errors import CorruptCatalogState, ModuleNotInstalled
from extops.core.models import CatalogEntry

log = logging.getLogger(__name__)


class ExtensionCatalogAdapter(Protocol):
    """Interface for reading the installed-extensions catalog."""

    def fetch_extension(self, extname: str) -> CatalogEntry | None:
        """Return the catalog entry for `extname`, or None if not installed."""
        ...

    def list_extensions(self) -> list[CatalogEntry]:
        """Return all installed extensions."""
        ...


def get_current_version(adapter: ExtensionCatalogAdapter, extname: str) -> str:
    """
    Return the version currently recorded for an installed extension.

    The lookup is an exact, case-sensitive match on the name. Visibility
    follows the adapter's connection, so an install done earlier in the
    same transaction is seen.

    Raises:
        ModuleNotInstalled: If no catalog entry matches.
        CorruptCatalogState: If the entry has no version recorded.
    """
    if not extname:
        raise ValueError("Extension name must not be empty.")

    entry = adapter.fetch_extension(extname)
    if entry is None:
        raise ModuleNotInstalled(extname)
    if entry.version is None:
        raise CorruptCatalogState("extversion is null")

    log.debug("extension %s is installed at version %s", extname, entry.version)
    return entry.version


def is_installed(adapter: ExtensionCatalogAdapter, extname: str) -> bool:
    """Return True if the catalog holds an entry for `extname`."""
    return adapter.fetch_extension(extname) is not None
