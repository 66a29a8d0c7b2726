"""Install and upgrade planning for extensions.

This module is the caller side of property resolution: it applies the
whitelist, decides where `old_version` comes from for an upgrade, and
wraps the result in an ExtensionPlan. It is free of CLI concerns and can
be reused by other frontends (automation, tests).
"""

from __future__ import annotations

import logging
from typing import Iterable

from extops.core.catalog import ExtensionCatalogAdapter, get_current_version
from extops.core.models import (
    OPT_OLD_VERSION,
    ExtensionOption,
    ExtensionPlan,
    PlanAction,
)
from extops.core.properties import ControlFileSource, resolve_properties, scan_options
from extops.core.search_path import SearchPathAdapter
from extops.core.whitelist import Whitelist, check_allowed

log = logging.getLogger(__name__)


def plan_install(
    extname: str,
    options: Iterable[ExtensionOption],
    *,
    control_reader: ControlFileSource,
    search_path: SearchPathAdapter,
    whitelist: Whitelist | None = None,
) -> ExtensionPlan:
    """
    Plan a CREATE EXTENSION.

    Raises:
        ExtensionNotWhitelisted: If a whitelist is given and lacks `extname`.
        ExtensionError: Any resolution failure, see `resolve_properties`.
    """
    check_allowed(whitelist, extname)
    props = resolve_properties(
        extname,
        options,
        control_reader=control_reader,
        search_path=search_path,
    )
    return ExtensionPlan(extname=extname, action=PlanAction.INSTALL, properties=props)


def plan_update(
    extname: str,
    options: Iterable[ExtensionOption],
    *,
    control_reader: ControlFileSource,
    search_path: SearchPathAdapter,
    catalog: ExtensionCatalogAdapter,
    whitelist: Whitelist | None = None,
) -> ExtensionPlan:
    """
    Plan an ALTER EXTENSION ... UPDATE.

    When the statement does not name the version being upgraded from, the
    currently installed version is read from the catalog and passed to
    the resolver as if it had been given explicitly.

    Raises:
        ExtensionNotWhitelisted: If a whitelist is given and lacks `extname`.
        ModuleNotInstalled: If the extension is not installed.
        CorruptCatalogState: If the catalog entry has no version.
        ExtensionError: Any resolution failure, see `resolve_properties`.
    """
    check_allowed(whitelist, extname)
    options = list(options)

    if scan_options(options)[OPT_OLD_VERSION] is None:
        current = get_current_version(catalog, extname)
        log.debug("upgrading %s from catalog version %s", extname, current)
        options.append(ExtensionOption(OPT_OLD_VERSION, current))

    props = resolve_properties(
        extname,
        options,
        control_reader=control_reader,
        search_path=search_path,
    )
    return ExtensionPlan(extname=extname, action=PlanAction.UPDATE, properties=props)
