"""Interactive prompt loop.

Asks for a filename, then a command, until the user types ``exit`` or
input ends. Failures are reported and logged; they never end the loop.
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .outcome import Action
from .session import Session

__all__ = ["InteractiveShell"]

BANNER = "safebackup - type 'exit' to quit"
FILENAME_PROMPT = "Please enter your file name"
COMMAND_PROMPT = "Please enter your command (backup, restore, delete, exit)"
UNKNOWN_COMMAND = "Unknown command. Allowed: backup | restore | delete | exit"
EXIT_WORD = "exit"

COMMANDS = {action.value: action for action in Action}


class InteractiveShell:
    def __init__(
        self,
        session: Session,
        *,
        console: Optional[Console] = None,
        input_fn: Optional[Callable[[str], str]] = None,
    ):
        self.session = session
        self.console = console or Console(highlight=False)
        self._input = input_fn or self._ask

    def _ask(self, prompt: str) -> str:
        return Prompt.ask(
            prompt, console=self.console, default="", show_default=False
        )

    def confirm_delete(self, filename: str) -> str:
        question = (
            f"Are you sure you want to delete '{escape(filename)}'? (yes/no)"
        )
        try:
            return self._input(question)
        except (EOFError, KeyboardInterrupt):
            return ""

    def run(self) -> int:
        self.console.print(BANNER)
        while True:
            try:
                filename = self._input(FILENAME_PROMPT).strip()
                if filename.lower() == EXIT_WORD:
                    break
                command = self._input(COMMAND_PROMPT).strip().lower()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if command == EXIT_WORD:
                break
            action = COMMANDS.get(command)
            if action is None:
                self.console.print(UNKNOWN_COMMAND)
                continue
            self.session.run(action, filename, confirm=self.confirm_delete)
        self.console.print("Exiting.")
        return 0
