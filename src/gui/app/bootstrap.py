"""Application bootstrap utilities for the task table.

Responsibilities:
 - Configure logging and attach the in-app log ring buffer
 - Build the key-value store for the selected backend and the record repository
 - Create the view model and load the collection once
 - Optionally create the QApplication (skipped when headless)

PyQt6 is imported lazily so the core and its tests run without a display.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from config import settings as config
from gui.repositories import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueRecordRepository,
    KeyValueStore,
    SqliteKeyValueStore,
)
from gui.services.event_bus import EventBus
from gui.services.logging_service import LoggingService, configure_logging
from gui.services.settings_service import SettingsService
from gui.viewmodels.task_table_viewmodel import TaskTableViewModel

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except ImportError:  # pragma: no cover - depends on environment
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_app", "create_store", "BACKENDS"]

_log = logging.getLogger(__name__)

BACKENDS = ("json", "sqlite", "memory")


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless or Qt missing)
    headless: Whether headless bootstrap was used
    event_bus: Bus shared by the view model and the view
    repository: Record repository bound to the selected store
    viewmodel: Session state owner (already loaded)
    settings: Runtime settings in effect
    logging_service: Ring buffer of recent log records
    metadata: Backend name, data directory, bootstrap duration
    """

    qt_app: Optional[Any]
    headless: bool
    event_bus: EventBus
    repository: KeyValueRecordRepository
    viewmodel: TaskTableViewModel
    settings: SettingsService
    logging_service: LoggingService
    metadata: dict[str, Any] = field(default_factory=dict)

    def close(self) -> None:
        """Detach the log ring buffer and release the store. Safe to call twice."""
        self.logging_service.detach_root()
        closer = getattr(self.repository.store, "close", None)
        if callable(closer):
            closer()
        _log.debug("Application context closed")


def create_store(backend: str, data_dir: str) -> KeyValueStore:
    if backend == "json":
        return JsonFileKeyValueStore(data_dir)
    if backend == "sqlite":
        return SqliteKeyValueStore(os.path.join(data_dir, config.SQLITE_FILENAME))
    if backend == "memory":
        return InMemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend {backend!r}; expected one of {BACKENDS}")


def create_app(
    *,
    headless: bool | None = None,
    data_dir: str | None = None,
    backend: str | None = None,
    store: KeyValueStore | None = None,
    settings: SettingsService | None = None,
    log_level: str | None = None,
) -> AppContext:
    """Create and initialize the application context.

    Parameters
    ----------
    headless: Skip QApplication creation. If None, inferred by Qt availability.
    data_dir: Directory for file based stores (defaults to ``config.DATA_DIR``).
    backend: One of ``BACKENDS`` (defaults to ``config.STORAGE_BACKEND``).
    store: Explicit store instance; overrides ``backend``.
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE
    configure_logging(log_level or config.LOG_LEVEL)
    logging_service = LoggingService()
    logging_service.attach_root()

    data_dir = data_dir or config.DATA_DIR
    backend = backend or config.STORAGE_BACKEND
    if store is None:
        store = create_store(backend, data_dir)
    else:
        backend = type(store).__name__

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    settings = settings or SettingsService.instance
    bus = EventBus()
    repository = KeyValueRecordRepository(store)
    viewmodel = TaskTableViewModel(repository, event_bus=bus, settings=settings)
    viewmodel.load()

    duration = time.perf_counter() - started
    _log.info(
        "Bootstrap complete: backend=%s records=%d in %.3fs", backend, len(viewmodel.records), duration
    )
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        event_bus=bus,
        repository=repository,
        viewmodel=viewmodel,
        settings=settings,
        logging_service=logging_service,
        metadata={
            "qt_available": _QT_AVAILABLE,
            "backend": backend,
            "data_dir": data_dir,
            "duration_s": duration,
        },
    )
