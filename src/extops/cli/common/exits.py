"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from extops.cli.common.output import out
from extops.core.errors import ExtensionError

EXIT_FAILURE = 1
EXIT_USAGE = 2


def die(msg: str, code: int = EXIT_FAILURE) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = EXIT_FAILURE) -> NoReturn:
    """Print an error message and exit, chaining the original exception."""
    out.error(message)
    raise typer.Exit(code) from exc


def exit_from_extension_error(exc: ExtensionError) -> NoReturn:
    """Report a resolution failure together with its SQLSTATE."""
    exit_from_exc(exc, message=f"{exc} [SQLSTATE {exc.sqlstate}]", code=EXIT_FAILURE)
