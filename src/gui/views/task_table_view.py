"""TaskTableView

QTableWidget-based view of the task collection. Backed by
``TaskTableViewModel``: every user gesture is forwarded to the view model and
the table is repainted from ``snapshot()`` afterwards.

Columns: Task Name | Priority | Done | (delete button). Clicking a sortable
header sorts by that column, clicking it again flips the direction.
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from config import settings
from domain.models import Priority, SortDirection, SortField
from gui.viewmodels.task_table_viewmodel import TableSnapshot, TaskTableViewModel

__all__ = ["TaskTableView"]

_COLUMNS: List[Optional[SortField]] = [SortField.NAME, SortField.PRIORITY, SortField.DONE, None]
_DELETE_COLUMN = 3
_ID_ROLE = Qt.ItemDataRole.UserRole


class TaskTableView(QWidget):
    def __init__(self, viewmodel: TaskTableViewModel, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.viewmodel = viewmodel
        self._populating = False
        self._build_ui()
        self.refresh()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.title_label = QLabel(settings.WINDOW_TITLE)
        self.title_label.setObjectName("viewTitleLabel")
        root.addWidget(self.title_label)

        add_bar = QHBoxLayout()
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("New task")
        self.name_edit.textChanged.connect(self._on_name_changed)  # type: ignore
        self.name_edit.returnPressed.connect(self._on_add_clicked)  # type: ignore
        self.priority_combo = QComboBox()
        for p in Priority:
            self.priority_combo.addItem(p.label, int(p))
        self.add_button = QPushButton("Add")
        self.add_button.setEnabled(False)
        self.add_button.clicked.connect(self._on_add_clicked)  # type: ignore
        add_bar.addWidget(self.name_edit, 1)
        add_bar.addWidget(self.priority_combo)
        add_bar.addWidget(self.add_button)
        root.addLayout(add_bar)

        self.table = QTableWidget(0, len(_COLUMNS))
        self.table.setHorizontalHeaderLabels([f.label if f else "" for f in _COLUMNS])
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSortIndicatorShown(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        self.table.itemChanged.connect(self._on_item_changed)  # type: ignore
        root.addWidget(self.table)

        pager = QHBoxLayout()
        pager.addStretch(1)
        pager.addWidget(QLabel("Rows per page:"))
        self.page_size_combo = QComboBox()
        for size in settings.PAGE_SIZE_OPTIONS:
            self.page_size_combo.addItem(str(size), size)
        self.page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)  # type: ignore
        pager.addWidget(self.page_size_combo)
        self.range_label = QLabel()
        pager.addWidget(self.range_label)
        self.prev_button = QPushButton("<")
        self.prev_button.clicked.connect(self._on_prev_clicked)  # type: ignore
        self.next_button = QPushButton(">")
        self.next_button.clicked.connect(self._on_next_clicked)  # type: ignore
        pager.addWidget(self.prev_button)
        pager.addWidget(self.next_button)
        root.addLayout(pager)

    # Rendering ------------------------------------------------------------
    def refresh(self) -> None:
        self._populate(self.viewmodel.snapshot())

    def _populate(self, snap: TableSnapshot) -> None:
        self._populating = True
        try:
            self.table.clearContents()
            self.table.setRowCount(len(snap.window) + snap.empty_rows)
            for r, record in enumerate(snap.window):
                name_item = QTableWidgetItem(record.name)
                name_item.setData(_ID_ROLE, record.id)
                name_item.setFlags(name_item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                prio_item = QTableWidgetItem(record.priority_label)
                prio_item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                prio_item.setFlags(prio_item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                done_item = QTableWidgetItem()
                done_item.setData(_ID_ROLE, record.id)
                done_item.setFlags(Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsUserCheckable)
                done_item.setCheckState(
                    Qt.CheckState.Checked if record.done else Qt.CheckState.Unchecked
                )
                self.table.setItem(r, 0, name_item)
                self.table.setItem(r, 1, prio_item)
                self.table.setItem(r, 2, done_item)
                delete_button = QPushButton("Delete")
                delete_button.setToolTip("Delete")
                delete_button.setObjectName("deleteButton")
                delete_button.clicked.connect(  # type: ignore
                    lambda _checked=False, rid=record.id: self._on_delete_clicked(rid)
                )
                self.table.setCellWidget(r, _DELETE_COLUMN, delete_button)
            # Padding rows keep the table height stable on short pages
            for r in range(len(snap.window), len(snap.window) + snap.empty_rows):
                self.table.removeCellWidget(r, _DELETE_COLUMN)
                for c in range(len(_COLUMNS)):
                    pad = QTableWidgetItem("")
                    pad.setFlags(Qt.ItemFlag.NoItemFlags)
                    self.table.setItem(r, c, pad)
            column = _COLUMNS.index(snap.sort_state.field)
            order = (
                Qt.SortOrder.AscendingOrder
                if snap.sort_state.direction is SortDirection.ASCENDING
                else Qt.SortOrder.DescendingOrder
            )
            self.table.horizontalHeader().setSortIndicator(column, order)
            combo_index = self.page_size_combo.findData(snap.page_state.page_size)
            if combo_index != self.page_size_combo.currentIndex():
                self.page_size_combo.blockSignals(True)
                self.page_size_combo.setCurrentIndex(combo_index)
                self.page_size_combo.blockSignals(False)
            self.range_label.setText(snap.range_text)
            self.prev_button.setEnabled(snap.has_previous)
            self.next_button.setEnabled(snap.has_next)
        finally:
            self._populating = False

    # Event handlers -------------------------------------------------------
    def _on_header_clicked(self, logical_index: int) -> None:
        field = _COLUMNS[logical_index] if 0 <= logical_index < len(_COLUMNS) else None
        if field is None:
            self.refresh()  # restore indicator on the non-sortable column
            return
        self.viewmodel.sort_by(field)
        self.refresh()

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._populating or item.column() != 2:
            return
        record_id = item.data(_ID_ROLE)
        if not record_id:
            return
        checked = item.checkState() == Qt.CheckState.Checked
        self.viewmodel.toggle_field(record_id, SortField.DONE.value, checked)
        # repaint once the signal has returned; clearContents destroys the sender
        QTimer.singleShot(0, self.refresh)

    def _on_delete_clicked(self, record_id: str) -> None:
        self.viewmodel.delete_record(record_id)
        QTimer.singleShot(0, self.refresh)

    def _on_page_size_changed(self, index: int) -> None:
        size = self.page_size_combo.itemData(index)
        if size is None:
            return
        self.viewmodel.change_page_size(int(size))
        self.refresh()

    def _on_prev_clicked(self) -> None:
        self.viewmodel.change_page(self.viewmodel.page_state.page_index - 1)
        self.refresh()

    def _on_next_clicked(self) -> None:
        self.viewmodel.change_page(self.viewmodel.page_state.page_index + 1)
        self.refresh()

    def _on_name_changed(self, text: str) -> None:
        self.add_button.setEnabled(bool(text.strip()))

    def _on_add_clicked(self) -> None:
        name = self.name_edit.text().strip()
        if not name:
            return
        self.viewmodel.add_record(name, Priority(self.priority_combo.currentData()))
        self.name_edit.clear()
        self.refresh()

    # Testing helpers ------------------------------------------------------
    def visible_names(self) -> List[str]:
        names: List[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, 0)
            if item is not None and item.data(_ID_ROLE):
                names.append(item.text())
        return names

    def row_count(self) -> int:
        return self.table.rowCount()

    def range_text(self) -> str:
        return self.range_label.text()

    def done_item(self, row: int) -> Optional[QTableWidgetItem]:
        return self.table.item(row, 2)
