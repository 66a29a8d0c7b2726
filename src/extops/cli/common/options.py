"""Common CLI options for the CLI."""

from pathlib import Path

import typer

ShareDirOpt = typer.Option(
    None,
    "--share-dir",
    help="PostgreSQL share directory (defaults to $EXTOPS_SHARE_DIR or pg_config --sharedir)",
    file_okay=False,
)

DsnOpt = typer.Option(
    None,
    "--dsn",
    help="SQLAlchemy database URL (defaults to $EXTOPS_DSN)",
)

WhitelistOpt = typer.Option(
    None,
    "--whitelist",
    help="Comma-separated extension whitelist (defaults to $EXTOPS_WHITELIST)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Show debug logging",
)

SchemaOpt = typer.Option(
    None,
    "--schema",
    help="Target schema (explicit, wins over control file and search path)",
)

NewVersionOpt = typer.Option(
    None,
    "--new-version",
    help="Version to install or upgrade to",
)

OldVersionOpt = typer.Option(
    None,
    "--old-version",
    help="Version to upgrade from (defaults to the installed version)",
)

StatementOpt = typer.Option(
    [],
    "--option",
    "-o",
    help="Raw statement option (name=value, or name for a flag). This is reusable.",
    show_default=False,
)

UpdateOpt = typer.Option(
    False,
    "--update",
    help="Plan an upgrade of an installed extension instead of an install",
)

SearchPathOpt = typer.Option(
    None,
    "--search-path",
    help="search_path value to use instead of asking the database",
)
