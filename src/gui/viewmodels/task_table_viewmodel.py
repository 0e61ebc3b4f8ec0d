"""ViewModel for the task table.

Owns the session's record collection together with the active sort and page
state. Every mutation goes through ``domain.mutations`` so the id uniqueness
and ordering invariants hold; the view only reads ``snapshot()`` and forwards
user events (sort, page, toggle, delete, add).

Persistence protocol:
 - delete and add always write through to the repository
 - toggles write through when ``SettingsService.write_through_toggles`` is on,
   otherwise they are kept in memory until ``save()``
 - a failed write is logged and published as ``PERSIST_FAILED``; the
   in-memory collection keeps the new state either way
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from domain import mutations
from domain.errors import StorageError
from domain.models import PageState, Priority, Record, SortField, SortState
from domain.ordering import sort_records
from domain.pagination import PageWindow, last_page_index, paginate, range_label
from gui.repositories.protocols import RecordRepository
from gui.services.event_bus import EventBus, GUIEvent
from gui.services.settings_service import SettingsService

__all__ = ["TableSnapshot", "TaskTableViewModel"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSnapshot:
    """Everything the rendering layer needs for one paint."""

    ordered: Tuple[Record, ...]
    window: Tuple[Record, ...]
    empty_rows: int
    sort_state: SortState
    page_state: PageState
    total: int

    @property
    def range_text(self) -> str:
        return range_label(self.total, self.page_state.page_index, self.page_state.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_state.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_state.page_index < last_page_index(self.total, self.page_state.page_size)


class TaskTableViewModel:
    def __init__(
        self,
        repository: RecordRepository,
        *,
        event_bus: EventBus | None = None,
        settings: SettingsService | None = None,
    ) -> None:
        self._repository = repository
        self._bus = event_bus or EventBus()
        self._settings = settings or SettingsService.instance
        self._records: Tuple[Record, ...] = ()
        self.sort_state = SortState()
        self.page_state = PageState(page_size=self._settings.default_page_size)
        self.dirty = False
        self.last_persist_error: Optional[StorageError] = None

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    # Loading / saving --------------------------------------------------
    def load(self) -> Tuple[Record, ...]:
        self._records = self._repository.load()
        self.page_state = self.page_state.clamped(len(self._records))
        self.dirty = False
        self._bus.publish(GUIEvent.RECORDS_LOADED, {"count": len(self._records)})
        return self._records

    def save(self) -> bool:
        """Persist the current collection. Returns False when the store failed."""
        try:
            self._repository.save(self._records)
        except StorageError as exc:
            self.last_persist_error = exc
            _log.error("Saving %d records failed: %s", len(self._records), exc)
            self._bus.publish(GUIEvent.PERSIST_FAILED, {"error": str(exc)})
            return False
        self.last_persist_error = None
        self.dirty = False
        return True

    # Derived views ------------------------------------------------------
    def ordered(self) -> Tuple[Record, ...]:
        return sort_records(self._records, self.sort_state)

    def window(self) -> PageWindow:
        return paginate(self.ordered(), self.page_state.page_index, self.page_state.page_size)

    def snapshot(self) -> TableSnapshot:
        ordered = self.ordered()
        win = paginate(ordered, self.page_state.page_index, self.page_state.page_size)
        return TableSnapshot(
            ordered=ordered,
            window=win.records,
            empty_rows=win.empty_rows,
            sort_state=self.sort_state,
            page_state=self.page_state,
            total=len(ordered),
        )

    # UI events ----------------------------------------------------------
    def sort_by(self, field: SortField | str) -> SortState:
        self.sort_state = self.sort_state.select(field)
        _log.debug("Sort changed to %s %s", self.sort_state.field.value, self.sort_state.direction.value)
        self._bus.publish(
            GUIEvent.SORT_CHANGED,
            {"field": self.sort_state.field.value, "direction": self.sort_state.direction.value},
        )
        return self.sort_state

    def change_page(self, index: int) -> PageState:
        self.page_state = self.page_state.with_page(index, len(self._records))
        self._publish_page()
        return self.page_state

    def change_page_size(self, size: int) -> PageState:
        self.page_state = self.page_state.with_page_size(size)
        self._publish_page()
        return self.page_state

    def toggle_field(self, record_id: str, field_name: str, value: Any) -> Tuple[Record, ...]:
        updated = mutations.set_field(self._records, record_id, field_name, value)
        if updated is self._records or updated == self._records:
            return self._records
        self._apply(updated, "toggle", record_id)
        if self._settings.write_through_toggles:
            self.save()
        else:
            self.dirty = True
        return self._records

    def delete_record(self, record_id: str) -> Tuple[Record, ...]:
        updated = mutations.remove(self._records, record_id)
        if len(updated) == len(self._records):
            return self._records
        self._apply(updated, "delete", record_id)
        clamped = self.page_state.clamped(len(self._records))
        if clamped != self.page_state:
            self.page_state = clamped
            self._publish_page()
        self.save()
        return self._records

    def add_record(self, name: str, priority: Priority | int = Priority.LOW) -> Record:
        record = mutations.new_record(name.strip(), priority)
        self._apply(mutations.append(self._records, record), "add", record.id)
        self.save()
        return record

    # Internal -----------------------------------------------------------
    def _apply(self, records: Tuple[Record, ...], action: str, record_id: str) -> None:
        self._records = records
        _log.info("%s %s -> %d records", action, record_id, len(records))
        self._bus.publish(
            GUIEvent.RECORDS_CHANGED, {"action": action, "id": record_id, "count": len(records)}
        )

    def _publish_page(self) -> None:
        self._bus.publish(
            GUIEvent.PAGE_CHANGED,
            {"page_index": self.page_state.page_index, "page_size": self.page_state.page_size},
        )
