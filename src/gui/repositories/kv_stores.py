"""Key-value store backends.

Three interchangeable implementations of ``KeyValueStore``:

* ``InMemoryKeyValueStore``: dict-backed, used by tests and headless runs.
* ``JsonFileKeyValueStore``: one JSON document per key inside a directory,
  written atomically via a temp file + replace (same approach as the app
  config store).
* ``SqliteKeyValueStore``: a single ``kv`` table in a SQLite database.

Backend failures (``OSError`` / ``sqlite3.Error``) surface as
``StorageError`` so callers only deal with one exception type. A JSON file
holding bytes that are not UTF-8 raises ``CorruptValueError`` carrying the
undecodable payload.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Dict, Optional

from domain.errors import CorruptValueError, StorageError

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore", "SqliteKeyValueStore"]

_log = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"[^A-Za-z0-9_.-]")


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileKeyValueStore:
    """Directory of ``<key>.json`` files."""

    SUFFIX = ".json"

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def _path(self, key: str) -> Path:
        return self.base_dir / (_SAFE_KEY_RE.sub("_", key) + self.SUFFIX)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed reading {path}: {exc}") from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptValueError(
                f"{path} is not valid UTF-8: {exc}", raw=data.decode("utf-8", "surrogateescape")
            ) from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            # surrogateescape round-trips bytes recovered by get()
            data = value.encode("utf-8", "surrogateescape")
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            tmp.replace(path)
        except (OSError, UnicodeEncodeError) as exc:
            raise StorageError(f"Failed writing {path}: {exc}") from exc
        _log.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed deleting key {key!r}: {exc}") from exc


class SqliteKeyValueStore:
    SCHEMA_SQL = "CREATE TABLE IF NOT EXISTS kv(key TEXT PRIMARY KEY, value TEXT NOT NULL)"

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path)
            with self._conn:
                self._conn.execute(self.SCHEMA_SQL)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Failed opening SQLite store {self.path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed reading key {key!r}: {exc}") from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO kv(key, value) VALUES(?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed writing key {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with self._conn:
                self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise StorageError(f"Failed deleting key {key!r}: {exc}") from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SqliteKeyValueStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
