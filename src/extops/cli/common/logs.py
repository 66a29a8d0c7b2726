"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from extops.cli.common.output import console


def setup_logging(verbose: bool) -> None:
    """Route `extops` log records to the console through Rich."""
    logger = logging.getLogger("extops")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    logger.propagate = False
