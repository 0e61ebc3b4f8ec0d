"""Repository interface layer.

The task table only needs two things from durable storage: a raw key-value
store that holds strings, and a record repository that turns the stored
payload into ``Record`` tuples and back. Both are expressed as ``Protocol``
types so tests and alternative backends can be swapped in freely.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable

from domain.models import Record

__all__ = ["KeyValueStore", "RecordRepository"]


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...  # pragma: no cover - interface

    def set(self, key: str, value: str) -> None: ...  # pragma: no cover - interface

    def delete(self, key: str) -> None: ...  # pragma: no cover - interface


@runtime_checkable
class RecordRepository(Protocol):
    def load(self) -> Tuple[Record, ...]: ...  # pragma: no cover - interface

    def save(self, records: Sequence[Record]) -> None: ...  # pragma: no cover - interface
