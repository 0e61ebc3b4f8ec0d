"""Exception hierarchy for the task table core.

Mutation targets that do not exist are NOT errors (delete / toggle of a
missing id is a no-op), so there is no NotFound exception here.
"""

from __future__ import annotations

__all__ = [
    "TaskTableError",
    "InvalidFieldError",
    "InvalidPageSizeError",
    "DuplicateRecordIdError",
    "RecordFormatError",
    "StorageError",
    "CorruptValueError",
]


class TaskTableError(Exception):
    """Base class for all task table errors."""


class InvalidFieldError(TaskTableError, ValueError):
    """Raised when a comparator or mutation is asked for an unknown field.

    Field names originate from the fixed column definitions, so reaching this
    is a programming error rather than bad user input.
    """


class InvalidPageSizeError(TaskTableError, ValueError):
    """Raised when a page size outside the configured options is requested."""


class DuplicateRecordIdError(TaskTableError, ValueError):
    """Raised when appending a record whose id already exists."""


class RecordFormatError(TaskTableError, ValueError):
    """Raised when a serialized record cannot be decoded."""


class StorageError(TaskTableError):
    """Wraps a failure of the durable key-value store."""


class CorruptValueError(StorageError):
    """A stored value exists but cannot be decoded as text.

    ``raw`` holds the payload decoded with ``surrogateescape`` so it can be
    written back byte for byte.
    """

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw
