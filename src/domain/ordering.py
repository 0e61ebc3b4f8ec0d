"""Comparator engine and stable sort for task records.

Comparators follow the classic three-way contract (-1 / 0 / 1) over a single
field. The ascending comparator is built as the negation of the descending
one, so ``asc(a, b) == -desc(a, b)`` holds for every pair by construction.

``stable_sort`` decorates each record with its original index and sorts on
``(comparator result, index)``, which keeps equal keys in input order
regardless of the underlying sort primitive.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, Tuple

from domain.errors import InvalidFieldError
from domain.models import Record, SortDirection, SortField, SortState

__all__ = [
    "Comparator",
    "field_value",
    "descending_comparator",
    "build_comparator",
    "stable_sort",
    "sort_records",
]

Comparator = Callable[[Record, Record], int]

_FIELD_ACCESSORS: Dict[SortField, Callable[[Record], Any]] = {
    SortField.NAME: lambda r: r.name,
    SortField.PRIORITY: lambda r: int(r.priority),
    SortField.DONE: lambda r: bool(r.done),
}


def _coerce_field(field: SortField | str) -> SortField:
    try:
        return SortField(field)
    except ValueError:
        raise InvalidFieldError(f"Unknown sort field: {field!r}") from None


def field_value(record: Record, field: SortField | str) -> Any:
    return _FIELD_ACCESSORS[_coerce_field(field)](record)


def descending_comparator(a: Record, b: Record, field: SortField | str) -> int:
    accessor = _FIELD_ACCESSORS[_coerce_field(field)]
    va, vb = accessor(a), accessor(b)
    if vb < va:
        return -1
    if vb > va:
        return 1
    return 0


def build_comparator(direction: SortDirection | str, field: SortField | str) -> Comparator:
    """Return a comparator ordering records by ``field`` in ``direction``."""
    sort_field = _coerce_field(field)
    try:
        sort_direction = SortDirection(direction)
    except ValueError:
        raise ValueError(f"Unknown sort direction: {direction!r}") from None

    def desc(a: Record, b: Record) -> int:
        return descending_comparator(a, b, sort_field)

    if sort_direction is SortDirection.DESCENDING:
        return desc

    def asc(a: Record, b: Record) -> int:
        return -desc(a, b)

    return asc


def stable_sort(records: Iterable[Record], comparator: Comparator) -> Tuple[Record, ...]:
    decorated = list(enumerate(records))

    def _cmp(left: Tuple[int, Record], right: Tuple[int, Record]) -> int:
        order = comparator(left[1], right[1])
        if order != 0:
            return order
        return left[0] - right[0]

    decorated.sort(key=cmp_to_key(_cmp))
    return tuple(record for _, record in decorated)


def sort_records(records: Iterable[Record], state: SortState) -> Tuple[Record, ...]:
    return stable_sort(records, build_comparator(state.direction, state.field))
