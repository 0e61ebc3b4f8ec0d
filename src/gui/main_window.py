"""Main window hosting the task table."""

from __future__ import annotations

from PyQt6.QtWidgets import QMainWindow

from config import settings
from gui.services.event_bus import Event, GUIEvent
from gui.viewmodels.task_table_viewmodel import TaskTableViewModel
from gui.views.task_table_view import TaskTableView


class MainWindow(QMainWindow):
    def __init__(self, viewmodel: TaskTableViewModel):
        super().__init__()
        self.setWindowTitle(settings.WINDOW_TITLE)
        self.resize(720, 480)
        self.table_view = TaskTableView(viewmodel)
        self.setCentralWidget(self.table_view)
        bus = viewmodel.event_bus
        bus.subscribe(GUIEvent.PERSIST_FAILED, self._on_persist_failed)
        bus.subscribe(GUIEvent.RECORDS_CHANGED, self._on_records_changed)
        self.statusBar().showMessage(f"{len(viewmodel.records)} tasks")

    def _on_persist_failed(self, event: Event) -> None:
        self.statusBar().showMessage(f"Could not save tasks: {event.payload['error']}")

    def _on_records_changed(self, event: Event) -> None:
        self.statusBar().showMessage(f"{event.payload['count']} tasks", 3000)
