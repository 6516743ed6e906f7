from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from .base import Reporter, get_verbosity

_SEVERITY_ICON = {
    "info": "[green]✔[/]",
    "warning": "[yellow]![/]",
    "error": "[bold red]✖[/]",
}


class RichReporter(Reporter):
    def __init__(self, console: Console | None = None):
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )

    # Messages carry user-supplied filenames; never interpret them as markup.
    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def outcome(self, outcome) -> None:
        icon = _SEVERITY_ICON.get(outcome.severity, "")
        self.console.print(
            f"{icon} [bold]{outcome.action.value}[/] "
            f"{escape(outcome.filename)}: {escape(outcome.describe())}"
        )
