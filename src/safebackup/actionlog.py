"""Append-only action log (``logfile.txt``).

One line per action::

    <timestamp> | <action> | <filename> | <status>[ | error=<detail>]

The file is opened in append mode for each entry and closed right away, so
no handle is held between actions. Multi-line atomicity is not provided.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .outcome import OperationOutcome

__all__ = ["LOG_FILE_NAME", "LogEntry", "ActionLog"]

LOG_FILE_NAME = "logfile.txt"
_SEPARATOR = " | "


def _one_line(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass(slots=True)
class LogEntry:
    action: str
    filename: str
    status: str
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def from_outcome(cls, outcome: OperationOutcome) -> "LogEntry":
        return cls(
            action=outcome.action.value,
            filename=outcome.filename,
            status=outcome.status.value,
            error=outcome.error,
        )

    def format(self) -> str:
        parts = [
            self.timestamp.isoformat(sep=" "),
            self.action,
            _one_line(self.filename),
            self.status,
        ]
        if self.error:
            parts.append(f"error={_one_line(self.error)}")
        return _SEPARATOR.join(parts)


class ActionLog:
    def __init__(self, path: Path):
        self.path = Path(path)

    def append(self, entry: LogEntry) -> None:
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(entry.format() + "\n")
