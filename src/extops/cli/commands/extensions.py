"""Commands for resolving and inspecting PostgreSQL extensions."""

from __future__ import annotations

from pathlib import Path

import typer
from sqlalchemy.exc import SQLAlchemyError

from extops.cli.common.context import (
    ExtAppContext,
    UnavailableSearchPath,
    build_context,
)
from extops.cli.common.exits import (
    EXIT_USAGE,
    die,
    exit_from_exc,
    exit_from_extension_error,
    warn_exit,
)
from extops.cli.common.logs import setup_logging
from extops.cli.common.options import (
    DsnOpt,
    NewVersionOpt,
    OldVersionOpt,
    SchemaOpt,
    SearchPathOpt,
    ShareDirOpt,
    StatementOpt,
    UpdateOpt,
    VerboseOpt,
    WhitelistOpt,
)
from extops.cli.common.output import out
from extops.cli.common.statement_options import build_statement_options
from extops.cli.tui import select_extension
from extops.core.catalog import get_current_version
from extops.core.errors import ConfigError, ExtensionError
from extops.core.plan import plan_install, plan_update
from extops.core.search_path import StaticSearchPath, parse_search_path

app = typer.Typer(
    help="Resolve and inspect PostgreSQL extensions",
    no_args_is_help=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    share_dir: Path | None = ShareDirOpt,
    dsn: str | None = DsnOpt,
    whitelist: str | None = WhitelistOpt,
    verbose: bool = VerboseOpt,
):
    """Initialize settings shared by all commands."""
    setup_logging(verbose)
    ctx.obj = build_context(share_dir=share_dir, dsn=dsn, whitelist=whitelist)


@app.command()
def resolve(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Extension name (prompted if omitted)"),
    schema: str | None = SchemaOpt,
    new_version: str | None = NewVersionOpt,
    old_version: str | None = OldVersionOpt,
    option: list[str] = StatementOpt,
    update: bool = UpdateOpt,
    search_path: str | None = SearchPathOpt,
):
    """
    Resolve the schema and versions an install or upgrade would use.
    """
    appctx: ExtAppContext = ctx.obj

    try:
        reader = appctx.control_reader()
        options = build_statement_options(
            raw=option,
            schema=schema,
            new_version=new_version,
            old_version=old_version,
        )
        static_path = (
            StaticSearchPath(parse_search_path(search_path))
            if search_path is not None
            else None
        )
    except (ConfigError, ValueError) as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)

    if name is None:
        try:
            with appctx.catalog(required=False) as catalog:
                installed_versions = (
                    {e.name: e.version or "" for e in catalog.list_extensions()}
                    if catalog
                    else {}
                )
        except SQLAlchemyError as exc:
            exit_from_exc(exc, message=f"Database error: {exc}")
        name = select_extension(reader.list_available(), installed_versions)
        if not name:
            warn_exit("No extension selected", code=0)

    try:
        with appctx.catalog(required=update) as catalog:
            path_source = static_path or catalog or UnavailableSearchPath()
            if update:
                plan = plan_update(
                    name,
                    options,
                    control_reader=reader,
                    search_path=path_source,
                    catalog=catalog,
                    whitelist=appctx.whitelist(),
                )
            else:
                plan = plan_install(
                    name,
                    options,
                    control_reader=reader,
                    search_path=path_source,
                    whitelist=appctx.whitelist(),
                )
    except (ConfigError, ValueError) as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)
    except ExtensionError as exc:
        exit_from_extension_error(exc)
    except SQLAlchemyError as exc:
        exit_from_exc(exc, message=f"Database error: {exc}")

    out.plan_table(plan)
    if plan.is_noop:
        out.warn(f"Extension {name} is already at version {plan.properties.new_version}")
    else:
        out.success(f"Resolved {plan.action.value.lower()} of extension {name}")


@app.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Extension name"),
    version: str | None = typer.Option(
        None, "--version", help="Show the auxiliary control file for this version"
    ),
):
    """Show the entries of an extension control file."""
    appctx: ExtAppContext = ctx.obj

    try:
        control = appctx.control_reader().read(name, version)
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)
    except ExtensionError as exc:
        exit_from_extension_error(exc)

    out.info(f"File: {control.path}")
    if not control.entries:
        warn_exit("Control file is empty", code=0)
    out.control_table(control)


@app.command()
def available(ctx: typer.Context):
    """List extensions with a control file in the share directory."""
    appctx: ExtAppContext = ctx.obj

    try:
        reader = appctx.control_reader()
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)

    names = reader.list_available()
    if not names:
        warn_exit(f"No control files found in {reader.extension_dir}", code=0)

    out.header("Available extensions")
    out.info(f"Extensions available: {len(names)}")
    out.names_table(names, title="Available extensions")


@app.command()
def installed(ctx: typer.Context):
    """List extensions recorded in the catalog."""
    appctx: ExtAppContext = ctx.obj

    try:
        with out.status("Loading extensions..."):
            with appctx.catalog() as catalog:
                extensions = catalog.list_extensions()
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)
    except SQLAlchemyError as exc:
        exit_from_exc(exc, message=f"Database error: {exc}")

    if not extensions:
        warn_exit("No extensions installed", code=0)

    out.header("Installed extensions")
    out.info(f"Extensions installed: {len(extensions)}")
    out.extensions_table(extensions)


@app.command("current-version")
def current_version(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Extension name"),
):
    """Print the installed version of an extension."""
    appctx: ExtAppContext = ctx.obj

    if not name:
        die("Extension name must not be empty.", code=EXIT_USAGE)

    try:
        with appctx.catalog() as catalog:
            version = get_current_version(catalog, name)
    except ConfigError as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)
    except ExtensionError as exc:
        exit_from_extension_error(exc)
    except SQLAlchemyError as exc:
        exit_from_exc(exc, message=f"Database error: {exc}")

    typer.echo(version)
