"""Domain models for the task table: records plus sort and page state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping

from config import settings
from domain.errors import InvalidPageSizeError, RecordFormatError

__all__ = [
    "Priority",
    "Record",
    "SortField",
    "SortDirection",
    "SortState",
    "PageState",
]


class Priority(IntEnum):
    """Ordinal priority category; records store and sort by the numeric rank."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, text: str) -> "Priority":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown priority label: {text!r}") from None

    @classmethod
    def is_rank(cls, value: Any) -> bool:
        # bool is an int subclass; true/false is not a rank
        return isinstance(value, int) and not isinstance(value, bool) and value in cls._value2member_map_

    @classmethod
    def label_for(cls, rank: int) -> str:
        """Reverse lookup of a stored rank; unknown ranks render as the number."""
        try:
            return cls(rank).label
        except ValueError:
            return str(rank)


@dataclass(frozen=True, slots=True)
class Record:
    """One task entry.

    Attributes
    ----------
    id: Globally unique identity key, never changes once created.
    name: User-facing label.
    priority: Numeric rank (see ``Priority``).
    done: Completion flag toggled by the user.
    """

    id: str
    name: str
    priority: int = Priority.LOW.value
    done: bool = False

    @property
    def priority_label(self) -> str:
        return Priority.label_for(self.priority)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "priority": int(self.priority),
            "done": self.done,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        if not isinstance(data, Mapping):
            raise RecordFormatError(f"Record entry must be an object, got {type(data).__name__}")
        try:
            rid = data["id"]
            name = data["name"]
            priority = data["priority"]
            done = data["done"]
        except KeyError as exc:
            raise RecordFormatError(f"Record missing field {exc.args[0]!r}") from None
        if not isinstance(rid, str) or not rid:
            raise RecordFormatError("Record id must be a non-empty string")
        if not isinstance(name, str):
            raise RecordFormatError(f"Record {rid!r} name must be a string")
        if not Priority.is_rank(priority):
            raise RecordFormatError(f"Record {rid!r} priority {priority!r} is not a known rank")
        if not isinstance(done, bool):
            raise RecordFormatError(f"Record {rid!r} done must be a boolean")
        return cls(id=rid, name=name, priority=priority, done=done)


class SortField(str, Enum):
    NAME = "name"
    PRIORITY = "priority"
    DONE = "done"

    @property
    def label(self) -> str:
        return _FIELD_LABELS[self]


_FIELD_LABELS = {
    SortField.NAME: "Task Name",
    SortField.PRIORITY: "Priority",
    SortField.DONE: "Done",
}


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass(frozen=True, slots=True)
class SortState:
    field: SortField = SortField(settings.DEFAULT_SORT_FIELD)
    direction: SortDirection = SortDirection(settings.DEFAULT_SORT_DIRECTION)

    def select(self, field: SortField | str) -> "SortState":
        """Return the state after the user picks ``field``.

        Re-selecting the active field flips the direction; any other field
        becomes active in ascending order.
        """
        chosen = SortField(field)
        if chosen is self.field:
            return SortState(chosen, self.direction.flipped())
        return SortState(chosen, SortDirection.ASCENDING)


@dataclass(frozen=True, slots=True)
class PageState:
    page_index: int = 0
    page_size: int = settings.DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size not in settings.PAGE_SIZE_OPTIONS:
            raise InvalidPageSizeError(
                f"Page size {self.page_size} not in {settings.PAGE_SIZE_OPTIONS}"
            )
        if self.page_index < 0:
            raise ValueError("page_index must be >= 0")

    def last_index(self, total: int) -> int:
        return max(0, (max(1, total) - 1) // self.page_size)

    def with_page_size(self, size: int) -> "PageState":
        return PageState(page_index=0, page_size=size)

    def with_page(self, index: int, total: int) -> "PageState":
        return PageState(page_index=min(max(0, index), self.last_index(total)), page_size=self.page_size)

    def clamped(self, total: int) -> "PageState":
        """Return a state where ``page_index * page_size < max(1, total)``."""
        if self.page_index <= self.last_index(total):
            return self
        return PageState(page_index=self.last_index(total), page_size=self.page_size)
