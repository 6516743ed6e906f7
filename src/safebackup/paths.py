"""Path sandboxing for user-supplied filenames.

A raw filename is accepted only when it names something strictly inside the
sandbox root. Syntactic checks (absolute paths, ``..`` segments) run first;
the parent directory is then canonicalized so symlinked directories cannot
lead outside the root. The final component is not canonicalized, which lets
callers validate paths to files that do not exist yet.
"""

from __future__ import annotations

import errno
import logging
import re
from pathlib import Path, PurePosixPath, PureWindowsPath

from .errors import PathError, PathErrorKind

__all__ = ["MAX_NAME_LENGTH", "PathSanitizer", "sanitize"]

MAX_NAME_LENGTH = 255

_PARENT_SEGMENT = ".."
_SEPARATORS_RE = re.compile(r"[\\/]+")

log = logging.getLogger(__name__)


def _is_absolute(text: str) -> bool:
    # Windows anchors are rejected on every platform.
    return PurePosixPath(text).is_absolute() or bool(
        PureWindowsPath(text).anchor
    )


def _has_parent_segment(text: str) -> bool:
    return any(seg == _PARENT_SEGMENT for seg in _SEPARATORS_RE.split(text))


class PathSanitizer:
    """Resolve raw filenames to absolute paths under a fixed root."""

    def __init__(self, root: Path, max_length: int = MAX_NAME_LENGTH):
        self.root = Path(root).resolve()
        self.max_length = max_length

    def _contains(self, path: Path) -> bool:
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            return False
        return rel != Path(".")

    def sanitize(self, raw: str) -> Path:
        """Return the absolute path for ``raw`` or raise :class:`PathError`.

        Validity holds only at the instant of the check; callers must
        sanitize again on every operation.
        """
        text = raw.strip()
        if not text:
            raise PathError(PathErrorKind.EMPTY, raw)
        if len(text) > self.max_length:
            raise PathError(PathErrorKind.TOO_LONG, raw)
        if "\0" in text:
            raise PathError(PathErrorKind.INVALID_CHARACTER, raw)
        if _is_absolute(text):
            raise PathError(PathErrorKind.ABSOLUTE_NOT_ALLOWED, raw)
        if _has_parent_segment(text):
            raise PathError(PathErrorKind.TRAVERSAL_NOT_ALLOWED, raw)
        # A trailing separator names a directory, never a file.
        if text[-1] in "/\\":
            raise PathError(PathErrorKind.INVALID_CHARACTER, raw)

        resolved = self.contain(self.root / text, raw)
        log.debug("sanitized %r -> %s", raw, resolved)
        return resolved

    def contain(self, candidate: Path, raw: str = "") -> Path:
        """Canonicalize the parent of ``candidate`` and check containment.

        Also used for derived paths (backups) that never went through the
        syntactic checks.
        """
        raw = raw or str(candidate)
        try:
            parent = candidate.parent.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise PathError(PathErrorKind.INVALID_PARENT, raw) from exc
        if not parent.is_dir():
            raise PathError(PathErrorKind.INVALID_PARENT, raw)

        resolved = parent / candidate.name
        if not self._contains(resolved):
            raise PathError(PathErrorKind.ESCAPES, raw)
        # An existing symlink as the final component must point inside too.
        try:
            is_link = resolved.is_symlink()
        except OSError as exc:
            kind = (
                PathErrorKind.TOO_LONG
                if exc.errno == errno.ENAMETOOLONG
                else PathErrorKind.INVALID_PARENT
            )
            raise PathError(kind, raw) from exc
        if is_link:
            try:
                target = resolved.resolve()
            except (OSError, RuntimeError) as exc:
                raise PathError(PathErrorKind.ESCAPES, raw) from exc
            if not self._contains(target):
                raise PathError(PathErrorKind.ESCAPES, raw)
        return resolved


def sanitize(raw: str) -> Path:
    """Sanitize ``raw`` against the current working directory."""
    return PathSanitizer(Path.cwd()).sanitize(raw)
