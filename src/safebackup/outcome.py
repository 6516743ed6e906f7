"""Structured outcome of one user-requested action."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import OpError, OpErrorKind

__all__ = ["Action", "Status", "OperationOutcome"]


class Action(Enum):
    BACKUP = "backup"
    RESTORE = "restore"
    DELETE = "delete"


class Status(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class OperationOutcome:
    action: Action
    filename: str
    status: Status
    error: Optional[str] = None
    error_kind: Optional[str] = None
    path: Optional[Path] = None

    @classmethod
    def success(
        cls, action: Action, filename: str, path: Optional[Path] = None
    ) -> "OperationOutcome":
        return cls(action, filename, Status.SUCCESS, path=path)

    @classmethod
    def cancelled(cls, action: Action, filename: str) -> "OperationOutcome":
        return cls(action, filename, Status.CANCELLED)

    @classmethod
    def failure(
        cls, action: Action, filename: str, exc: OpError
    ) -> "OperationOutcome":
        return cls(
            action,
            filename,
            Status.FAILURE,
            error=str(exc),
            error_kind=exc.kind.value,
            path=exc.path,
        )

    @property
    def ok(self) -> bool:
        return self.status is not Status.FAILURE

    @property
    def severity(self) -> str:
        """``info``, ``warning`` or ``error``; a missing backup only warns."""
        if self.status is not Status.FAILURE:
            return "info"
        if self.error_kind == OpErrorKind.NO_BACKUP.value:
            return "warning"
        return "error"

    def describe(self) -> str:
        if self.status is Status.CANCELLED:
            return "Deletion cancelled."
        if self.status is Status.FAILURE:
            if self.error_kind == OpErrorKind.NO_BACKUP.value:
                return "Backup file not found."
            return f"Operation failed: {self.error}"
        if self.action is Action.BACKUP:
            return f"Your backup created: {self.path}"
        if self.action is Action.RESTORE:
            return f"File restored from: {self.path}"
        return "File deleted."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "filename": self.filename,
            "status": self.status.value,
            "error": self.error,
            "error_kind": self.error_kind,
            "path": str(self.path) if self.path is not None else None,
        }
