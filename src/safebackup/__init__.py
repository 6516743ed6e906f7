"""safebackup package

Back up, restore and delete a single file inside a sandbox directory,
rejecting any filename that could reach outside it.

The core API is :func:`sanitize`, :func:`backup`, :func:`restore` and
:func:`delete`, bound to the current working directory, plus
:class:`FileOperations` for an explicit root. The interactive prompt lives
in :mod:`safebackup.shell` and the command line in :mod:`safebackup.cli`.
"""

from ._version import __version__  # noqa: F401
from .errors import (
    ConfigError,
    OpError,
    OpErrorKind,
    PathError,
    PathErrorKind,
    SafeBackupError,
)
from .operations import (
    DeleteOutcome,
    FileOperations,
    backup,
    backup_path_for,
    delete,
    restore,
)
from .paths import PathSanitizer, sanitize

__all__ = [
    "__version__",
    "sanitize",
    "backup",
    "restore",
    "delete",
    "backup_path_for",
    "PathSanitizer",
    "FileOperations",
    "DeleteOutcome",
    "SafeBackupError",
    "PathError",
    "PathErrorKind",
    "OpError",
    "OpErrorKind",
    "ConfigError",
]
