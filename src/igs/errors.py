"""Fatal error types raised by the interactive loop."""

from __future__ import annotations


class IgsError(Exception):
    """Base class for errors that end the session with a non-zero exit."""


class StageError(IgsError):
    """Raised when ``git add`` or ``git reset`` fails for an entry."""

    def __init__(self, operation: str, path: str, detail: str = "") -> None:
        self.operation = operation
        self.path = path
        self.detail = detail
        message = f"{operation} failed for {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnsupportedEntryError(IgsError):
    """Raised for merge-conflict entries, which have no staging policy."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"merge conflicts are not supported: {line!r}")
