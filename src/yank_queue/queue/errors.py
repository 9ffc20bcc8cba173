"""Exceptions raised by the queue core."""

from __future__ import annotations


class QueueProtocolError(RuntimeError):
    """Raised when a caller breaks the copy/paste event contract."""


class ReplaceWithoutEntryError(QueueProtocolError):
    """Raised when a replace-head copy arrives before any entry exists."""

    def __init__(self, message: str, *, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidSeedError(ValueError):
    """Raised when a session is seeded with something other than text or a count."""


__all__ = [
    "QueueProtocolError",
    "ReplaceWithoutEntryError",
    "InvalidSeedError",
]
