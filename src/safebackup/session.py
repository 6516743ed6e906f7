"""Run one action, then report and log its outcome.

Shared by the interactive shell and the one-shot CLI commands.
"""

from __future__ import annotations

from typing import Callable, Optional

from .actionlog import ActionLog, LogEntry
from .errors import OpError
from .logging import get_logger
from .operations import DeleteOutcome, FileOperations
from .outcome import Action, OperationOutcome
from .reporting import get_reporter

__all__ = ["Confirm", "Session"]

# Called with the raw filename; returns the user's answer.
Confirm = Callable[[str], str]


class Session:
    def __init__(self, ops: FileOperations, log: Optional[ActionLog] = None):
        self.ops = ops
        self.log = log

    def run(
        self,
        action: Action,
        filename: str,
        confirm: Optional[Confirm] = None,
    ) -> OperationOutcome:
        try:
            outcome = self._execute(action, filename, confirm)
        except OpError as exc:
            outcome = OperationOutcome.failure(action, filename, exc)
        get_reporter().outcome(outcome)
        self._record(outcome)
        return outcome

    def _execute(
        self, action: Action, filename: str, confirm: Optional[Confirm]
    ) -> OperationOutcome:
        if action is Action.BACKUP:
            return OperationOutcome.success(
                action, filename, self.ops.backup(filename)
            )
        if action is Action.RESTORE:
            return OperationOutcome.success(
                action, filename, self.ops.restore(filename)
            )
        # Only ask once the target is known to be a deletable file.
        path = self.ops.resolve_file(filename)
        answer = confirm(filename) if confirm is not None else ""
        result = self.ops.delete(filename, answer)
        if result is DeleteOutcome.CANCELLED:
            return OperationOutcome.cancelled(action, filename)
        return OperationOutcome.success(action, filename, path)

    def _record(self, outcome: OperationOutcome) -> None:
        if self.log is None:
            return
        try:
            self.log.append(LogEntry.from_outcome(outcome))
        except OSError as exc:
            get_logger().warning(
                "could not write action log %s: %s", self.log.path, exc
            )
