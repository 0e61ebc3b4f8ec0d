"""Record mutation service.

All operations take a collection and return a new tuple; the input sequence
and its records are never edited in place. Lookups are by ``Record.id``. A
missing id is a no-op returning the input unchanged (a second delete click on
an already removed row is expected and benign).
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from domain.errors import DuplicateRecordIdError, InvalidFieldError
from domain.models import Priority, Record

__all__ = [
    "MUTABLE_FIELDS",
    "find_index",
    "set_field",
    "remove",
    "append",
    "new_record",
]

_log = logging.getLogger(__name__)


def _check_name(value: Any) -> bool:
    return isinstance(value, str)


def _check_priority(value: Any) -> bool:
    return Priority.is_rank(value)


def _check_done(value: Any) -> bool:
    return isinstance(value, bool)


MUTABLE_FIELDS: Dict[str, Callable[[Any], bool]] = {
    "name": _check_name,
    "priority": _check_priority,
    "done": _check_done,
}


def find_index(records: Sequence[Record], record_id: str) -> Optional[int]:
    for idx, record in enumerate(records):
        if record.id == record_id:
            return idx
    return None


def set_field(
    records: Sequence[Record], record_id: str, field_name: str, value: Any
) -> Tuple[Record, ...]:
    key = getattr(field_name, "value", field_name)
    validator = MUTABLE_FIELDS.get(key)
    if validator is None:
        raise InvalidFieldError(f"Field {field_name!r} is not mutable")
    if not validator(value):
        raise InvalidFieldError(f"Invalid value {value!r} for field {key!r}")
    if key == "priority":
        value = int(value)
    found = False
    out = []
    for record in records:
        if record.id == record_id:
            record = dataclasses.replace(record, **{key: value})
            found = True
        out.append(record)
    if not found:
        _log.debug("set_field: record %s not found; no-op", record_id)
        return tuple(records)
    return tuple(out)


def remove(records: Sequence[Record], record_id: str) -> Tuple[Record, ...]:
    kept = tuple(r for r in records if r.id != record_id)
    if len(kept) == len(records):
        _log.debug("remove: record %s not found; no-op", record_id)
        return tuple(records)
    return kept


def append(records: Sequence[Record], record: Record) -> Tuple[Record, ...]:
    if find_index(records, record.id) is not None:
        raise DuplicateRecordIdError(f"Record id {record.id!r} already exists")
    return tuple(records) + (record,)


def new_record(name: str, priority: Priority | int = Priority.LOW) -> Record:
    if not Priority.is_rank(priority):
        raise InvalidFieldError(f"Invalid value {priority!r} for field 'priority'")
    return Record(id=uuid.uuid4().hex, name=name, priority=int(priority), done=False)
