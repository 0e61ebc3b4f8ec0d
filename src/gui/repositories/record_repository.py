"""Record persistence on top of a ``KeyValueStore``.

The collection is stored under a single key as a JSON list of record objects
(``{"id", "name", "priority", "done"}``), field for field.

Loading is tolerant: an empty store yields an empty collection, a corrupt
payload is copied to ``<key>.corrupt.<timestamp>`` and replaced by an empty
collection, malformed entries are skipped and duplicate ids keep their first
occurrence. Saving propagates ``StorageError`` so the caller decides what a
failed write means for its in-memory state.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import List, Sequence, Set, Tuple

from config import settings
from domain.errors import CorruptValueError, RecordFormatError
from domain.models import Record

from .protocols import KeyValueStore

__all__ = ["KeyValueRecordRepository"]

_log = logging.getLogger(__name__)


class KeyValueRecordRepository:
    def __init__(self, store: KeyValueStore, key: str = settings.STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> Tuple[Record, ...]:
        try:
            raw = self.store.get(self.key)
        except CorruptValueError as exc:
            self._backup_corrupt(exc.raw, "undecodable bytes")
            return ()
        if raw is None or not raw.strip():
            return ()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._backup_corrupt(raw, f"invalid JSON ({exc.msg})")
            return ()
        if not isinstance(payload, list):
            self._backup_corrupt(raw, f"expected list, got {type(payload).__name__}")
            return ()
        records: List[Record] = []
        seen: Set[str] = set()
        for position, entry in enumerate(payload):
            try:
                record = Record.from_dict(entry)
            except RecordFormatError as exc:
                _log.warning("Skipping stored record #%d: %s", position, exc)
                continue
            if record.id in seen:
                _log.warning("Dropping duplicate stored record id %s", record.id)
                continue
            seen.add(record.id)
            records.append(record)
        _log.info("Loaded %d records from key %r", len(records), self.key)
        return tuple(records)

    def save(self, records: Sequence[Record]) -> None:
        payload = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
        self.store.set(self.key, payload)
        _log.debug("Saved %d records to key %r", len(records), self.key)

    def _backup_corrupt(self, raw: str, reason: str) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        backup_key = f"{self.key}.corrupt.{stamp}"
        _log.warning("Stored collection %r is corrupt (%s); backed up to %r", self.key, reason, backup_key)
        self.store.set(backup_key, raw)
