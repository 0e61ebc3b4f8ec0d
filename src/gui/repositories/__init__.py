"""Repository layer public exports.

Exposes the storage Protocols, the key-value backends and the record
repository used by the task table view model.
"""

from .protocols import KeyValueStore, RecordRepository
from .kv_stores import InMemoryKeyValueStore, JsonFileKeyValueStore, SqliteKeyValueStore
from .record_repository import KeyValueRecordRepository

__all__ = [
    "KeyValueStore",
    "RecordRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "SqliteKeyValueStore",
    "KeyValueRecordRepository",
]
