"""Backup, restore and delete for a single file inside the sandbox root.

Each entry point takes the raw filename and sanitizes it again; no resolved
path is cached between calls. Every precondition is checked before the
filesystem is touched.

No coordination with other processes is attempted: a backup and a restore
of the same file running concurrently can interleave.
"""

from __future__ import annotations

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Union

from .errors import (
    OpError,
    OpErrorKind,
    PathError,
    invalid_path,
    io_failure,
)
from .paths import MAX_NAME_LENGTH, PathSanitizer

__all__ = [
    "BACKUP_SUFFIX",
    "CONFIRM_TOKEN",
    "DeleteOutcome",
    "FileOperations",
    "backup_path_for",
    "backup",
    "restore",
    "delete",
]

BACKUP_SUFFIX = ".bak"
CONFIRM_TOKEN = "yes"

log = logging.getLogger(__name__)


class DeleteOutcome(Enum):
    DELETED = "deleted"
    CANCELLED = "cancelled"


def backup_path_for(path: Union[str, Path]) -> Union[str, Path]:
    """Return the backup location for ``path``.

    ``report.csv`` becomes ``report.csv.bak`` and ``README`` becomes
    ``README.bak``. Purely textual; returns ``str`` for ``str`` input.
    """
    p = Path(path)
    bak = p.with_name(p.name + BACKUP_SUFFIX)
    return str(bak) if isinstance(path, str) else bak


def _copy(src: Path, dst: Path) -> None:
    # Contents and permission bits, like a plain file copy.
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


class FileOperations:
    def __init__(self, root: Path, *, max_name_length: int = MAX_NAME_LENGTH):
        self.sanitizer = PathSanitizer(root, max_length=max_name_length)

    @property
    def root(self) -> Path:
        return self.sanitizer.root

    def resolve(self, filename: str) -> Path:
        try:
            return self.sanitizer.sanitize(filename)
        except PathError as exc:
            raise invalid_path(exc) from exc

    def _backup_of(self, path: Path) -> Path:
        try:
            return self.sanitizer.contain(backup_path_for(path))
        except PathError as exc:
            raise invalid_path(exc) from exc

    def resolve_file(self, filename: str) -> Path:
        """Sanitize ``filename`` and require an existing regular file."""
        path = self.resolve(filename)
        if not path.exists():
            raise OpError(OpErrorKind.NOT_FOUND, path=path)
        if not path.is_file():
            raise OpError(OpErrorKind.NOT_A_FILE, path=path)
        return path

    def backup(self, filename: str) -> Path:
        """Copy the file to its ``.bak`` sibling, replacing any older backup."""
        path = self.resolve_file(filename)
        target = self._backup_of(path)
        try:
            _copy(path, target)
        except OSError as exc:
            raise io_failure(target, exc) from exc
        log.debug("copied %s -> %s", path, target)
        return target

    def restore(self, filename: str) -> Path:
        """Overwrite the file with its backup and return the backup path.

        A missing backup raises ``NO_BACKUP`` and leaves the file untouched.
        """
        path = self.resolve(filename)
        source = self._backup_of(path)
        if not source.exists():
            raise OpError(OpErrorKind.NO_BACKUP, path=source)
        if path.exists() and not path.is_file():
            raise OpError(OpErrorKind.NOT_A_FILE, path=path)
        try:
            _copy(source, path)
        except OSError as exc:
            raise io_failure(path, exc) from exc
        log.debug("copied %s -> %s", source, path)
        return source

    def delete(self, filename: str, confirmation: str) -> DeleteOutcome:
        path = self.resolve_file(filename)
        if confirmation.strip().lower() != CONFIRM_TOKEN:
            log.debug("delete of %s not confirmed", path)
            return DeleteOutcome.CANCELLED
        try:
            path.unlink()
        except OSError as exc:
            raise io_failure(path, exc) from exc
        log.debug("removed %s", path)
        return DeleteOutcome.DELETED


def backup(filename: str) -> Path:
    return FileOperations(Path.cwd()).backup(filename)


def restore(filename: str) -> Path:
    return FileOperations(Path.cwd()).restore(filename)


def delete(filename: str, confirmation: str) -> DeleteOutcome:
    return FileOperations(Path.cwd()).delete(filename, confirmation)
