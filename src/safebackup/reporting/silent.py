from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """No-op reporter (quiet mode)."""

    def status(self, message: str, **fields):
        pass

    def verbose(self, message: str, *, level: int = 1, **fields):
        pass

    def error(self, message: str, **fields):
        pass

    def warning(self, message: str, **fields):
        pass

    def outcome(self, outcome) -> None:
        pass
