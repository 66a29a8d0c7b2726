"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def plan_table(self, plan: Any, title: str = "Resolved properties") -> None:
        """
        Expects an object with .extname .action and .properties
        (like extops.core.models.ExtensionPlan)
        """
        props = plan.properties
        action = plan.action.value if hasattr(plan.action, "value") else str(plan.action)

        t = Table(title=title, show_lines=False)
        t.add_column("Property", style="meta", no_wrap=True)
        t.add_column("Value", style="ok")

        t.add_row("extension", plan.extname)
        t.add_row("action", action)
        t.add_row("schema", props.schema)
        t.add_row("old_version", props.old_version or "")
        t.add_row("new_version", props.new_version)

        console.print(t)

    def control_table(self, control: Any, title: str | None = None) -> None:
        """Render the key/value entries of a control file."""
        t = Table(title=title or f"{control.extname}.control", show_lines=False)
        t.add_column("Key", style="ok", no_wrap=True)
        t.add_column("Value")

        for key, value in control.entries.items():
            t.add_row(key, value)

        console.print(t)

    def extensions_table(
        self, extensions: Iterable[Any], title: str = "Installed extensions"
    ) -> None:
        """
        Expects objects with .name .version .schema
        (like extops.core.models.CatalogEntry)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok", no_wrap=True)
        t.add_column("Version")
        t.add_column("Schema", style="meta")

        for e in extensions:
            t.add_row(e.name, e.version or "", e.schema or "")

        console.print(t)

    def names_table(self, names: Iterable[str], title: str = "Extensions") -> None:
        """Render a single-column table of extension names."""
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok")

        for n in names:
            t.add_row(str(n))

        console.print(t)


out = Out()
