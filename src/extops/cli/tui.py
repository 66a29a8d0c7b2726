"""Terminal UI utilities for extension tooling."""

from __future__ import annotations

import questionary

from extops.cli.common.tui_style import QUESTIONARY_STYLE_SELECT

_MAX_NAME_WIDTH = 64


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _extension_choice_title(
    name: str, installed: dict[str, str], *, name_width: int
) -> str:
    """Format one choice as `<name>  (installed: <version>)` with aligned suffix."""
    short_name = _truncate(name, _MAX_NAME_WIDTH)
    version = installed.get(name)
    if version is None:
        return short_name
    return f"{short_name.ljust(name_width)}  (installed: {version})"


def select_extension(
    names: list[str], installed: dict[str, str] | None = None
) -> str | None:
    """Display a select prompt over available extensions.

    Args:
        names: Extension names to choose from.
        installed: Optional mapping of installed extension name to version.

    Returns:
        The selected name, or None if cancelled or nothing to choose.
    """
    if not names:
        return None
    installed = installed or {}
    name_width = max((len(_truncate(n, _MAX_NAME_WIDTH)) for n in names), default=0)

    choices = [
        questionary.Choice(
            title=_extension_choice_title(n, installed, name_width=name_width),
            value=n,
        )
        for n in names
    ]

    return questionary.select(
        "Select extension:",
        choices=choices,
        style=QUESTIONARY_STYLE_SELECT,
    ).ask()
