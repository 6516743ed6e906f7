from __future__ import annotations

import sys
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..outcome import OperationOutcome

__all__ = [
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
]


_VERBOSITY: int = 0  # global verbosity level set by CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    def status(self, message: str, **fields: Any) -> None:  # noteworthy info
        raise NotImplementedError

    def verbose(
        self, message: str, *, level: int = 1, **fields: Any
    ) -> None:  # lower-importance, gated by global verbosity
        pass

    def error(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def warning(self, message: str, **fields: Any) -> None:
        self.status(message, **fields)

    def outcome(self, outcome: "OperationOutcome") -> None:
        """Present the result of one backup/restore/delete."""
        message = outcome.describe()
        severity = outcome.severity
        if severity == "error":
            self.error(message)
        elif severity == "warning":
            self.warning(message)
        else:
            self.status(message)

    def flush(self) -> None:  # noqa: D401
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER

