"""Domain exceptions raised by the store and service layers."""

from __future__ import annotations


class QuestError(Exception):
    """Base class for Quest Live failures."""


class NotFoundError(QuestError):
    """A required record is missing from the data store."""


class ConflictError(QuestError):
    """The requested change conflicts with the current record state."""


class PreconditionError(QuestError):
    """An operation was invoked before its preconditions were met."""


class InvalidInputError(QuestError, ValueError):
    """Caller supplied a value the operation cannot accept."""


class StoreError(QuestError):
    """Transport or HTTP failure talking to the remote data store."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{status_code}: {body}" if body else str(status_code))


__all__ = [
    "ConflictError",
    "InvalidInputError",
    "NotFoundError",
    "PreconditionError",
    "QuestError",
    "StoreError",
]
