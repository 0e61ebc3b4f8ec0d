"""Logging service.

Configures standard-library logging for the application and keeps the most
recent records in a ring buffer so the view can show the latest activity
(for example a failed save) without tailing a log file.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

__all__ = ["LogEntry", "LoggingService", "configure_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a console handler on the root logger (idempotent)."""
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    if not any(getattr(h, "_epictodo_console", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._epictodo_console = True  # type: ignore[attr-defined]
        root.addHandler(handler)


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 200, level: int = logging.INFO) -> None:
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(level)
        self._attached = False

    def attach_root(self) -> None:
        if self._attached:
            return
        logging.getLogger().addHandler(self._handler)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    def _ingest_record(self, record: logging.LogRecord) -> None:
        self._entries.append(
            LogEntry(
                level=record.levelname,
                name=record.name,
                message=record.getMessage(),
                created=record.created,
            )
        )

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(self, *, level: str | None = None, name_contains: str | None = None) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self._entries:
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        self._entries.clear()
