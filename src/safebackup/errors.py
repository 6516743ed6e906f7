"""Error definitions for safebackup.

Every expected failure maps to a typed exception carrying a ``kind`` enum so
callers can branch on the condition instead of parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class PathErrorKind(Enum):
    EMPTY = "empty"
    TOO_LONG = "too_long"
    INVALID_CHARACTER = "invalid_character"
    ABSOLUTE_NOT_ALLOWED = "absolute_not_allowed"
    TRAVERSAL_NOT_ALLOWED = "traversal_not_allowed"
    INVALID_PARENT = "invalid_parent"
    ESCAPES = "escapes"


class OpErrorKind(Enum):
    INVALID_PATH = "invalid_path"
    NOT_FOUND = "not_found"
    NOT_A_FILE = "not_a_file"
    NO_BACKUP = "no_backup"
    IO_FAILURE = "io_failure"


_PATH_MESSAGES = {
    PathErrorKind.EMPTY: "Empty filename",
    PathErrorKind.TOO_LONG: "Filename is too long",
    PathErrorKind.INVALID_CHARACTER: "Invalid character in filename",
    PathErrorKind.ABSOLUTE_NOT_ALLOWED: "Absolute paths are not allowed",
    PathErrorKind.TRAVERSAL_NOT_ALLOWED: (
        "Parent directory traversal is not allowed"
    ),
    PathErrorKind.INVALID_PARENT: (
        "Parent directory does not exist or is not accessible"
    ),
    PathErrorKind.ESCAPES: "Path escapes the working directory",
}

_OP_MESSAGES = {
    OpErrorKind.INVALID_PATH: "Invalid path",
    OpErrorKind.NOT_FOUND: "File does not exist",
    OpErrorKind.NOT_A_FILE: "Path is not a regular file",
    OpErrorKind.NO_BACKUP: "Backup file not found",
    OpErrorKind.IO_FAILURE: "I/O failure",
}


class SafeBackupError(Exception):
    """Base class for all safebackup failures."""

    def to_dict(self) -> Dict[str, Any]:  # pragma: no cover
        return {"message": str(self)}


@dataclass(eq=False)
class PathError(SafeBackupError):
    """A raw filename was rejected by the sandbox."""

    kind: PathErrorKind
    raw: str = ""

    def __str__(self) -> str:
        return _PATH_MESSAGES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": str(self), "raw": self.raw}


@dataclass(eq=False)
class OpError(SafeBackupError):
    """A backup, restore or delete could not be carried out."""

    kind: OpErrorKind
    path: Optional[Path] = None
    detail: str = ""
    cause: Optional[PathError] = None

    def __str__(self) -> str:
        base = _OP_MESSAGES[self.kind]
        if self.cause is not None:
            return f"{base}: {self.cause}"
        if self.detail:
            return f"{base}: {self.detail}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "path": str(self.path) if self.path is not None else None,
            "detail": self.detail,
            "cause": self.cause.to_dict() if self.cause is not None else None,
        }


@dataclass(eq=False)
class ConfigError(SafeBackupError):
    message: str
    source: Optional[Path] = None

    def __str__(self) -> str:
        if self.source is not None:
            return f"{self.source}: {self.message}"
        return self.message


def invalid_path(cause: PathError) -> OpError:
    return OpError(OpErrorKind.INVALID_PATH, cause=cause)


def io_failure(path: Path, exc: OSError) -> OpError:
    detail = exc.strerror or str(exc)
    return OpError(OpErrorKind.IO_FAILURE, path=path, detail=detail)


__all__ = [
    "SafeBackupError",
    "PathError",
    "PathErrorKind",
    "OpError",
    "OpErrorKind",
    "ConfigError",
    "invalid_path",
    "io_failure",
]
