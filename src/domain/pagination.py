"""Page window computation over an ordered record sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from domain.models import Record

__all__ = ["PageWindow", "paginate", "page_count", "last_page_index", "iter_pages", "range_label"]


@dataclass(frozen=True, slots=True)
class PageWindow:
    """Records visible on one page plus the number of padding rows.

    ``empty_rows`` lets the presentation layer keep a constant table height
    on a short trailing page; no synthetic records are created.
    """

    records: Tuple[Record, ...]
    empty_rows: int

    def __len__(self) -> int:
        return len(self.records)


def _check(page_index: int, page_size: int) -> None:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if page_index < 0:
        raise ValueError("page_index must be >= 0")


def paginate(ordered: Sequence[Record], page_index: int, page_size: int) -> PageWindow:
    _check(page_index, page_size)
    start = page_index * page_size
    records = tuple(ordered[start : start + page_size])
    return PageWindow(records=records, empty_rows=max(0, page_size - len(records)))


def page_count(total: int, page_size: int) -> int:
    _check(0, page_size)
    return max(1, -(-total // page_size))


def last_page_index(total: int, page_size: int) -> int:
    return page_count(total, page_size) - 1


def iter_pages(ordered: Sequence[Record], page_size: int) -> Iterator[PageWindow]:
    for index in range(page_count(len(ordered), page_size)):
        yield paginate(ordered, index, page_size)


def range_label(total: int, page_index: int, page_size: int) -> str:
    """Caption for the pagination bar, e.g. ``"6-10 of 12"``."""
    if total == 0:
        return "0-0 of 0"
    start = min(page_index * page_size, total)
    end = min(start + page_size, total)
    return f"{start + 1 if end > start else start}-{end} of {total}"
