import pytest

pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import Qt  # noqa: E402

from domain.models import Record, SortDirection, SortField  # noqa: E402
from gui.repositories import InMemoryKeyValueStore, KeyValueRecordRepository  # noqa: E402
from gui.services.settings_service import SettingsService  # noqa: E402
from gui.viewmodels.task_table_viewmodel import TaskTableViewModel  # noqa: E402
from gui.views.task_table_view import TaskTableView  # noqa: E402


def _view(qtbot, records):
    repo = KeyValueRecordRepository(InMemoryKeyValueStore())
    repo.save(records)
    vm = TaskTableViewModel(repo, settings=SettingsService())
    vm.load()
    view = TaskTableView(vm)
    qtbot.addWidget(view)
    return view, repo


def test_initial_render_with_padding(qtbot, sample_records):
    view, _ = _view(qtbot, sample_records)
    assert view.title_label.text() == "Epic Todo List"
    assert view.visible_names() == ["Buy milk", "Read book", "Walk dog"]
    assert view.row_count() == 5  # 3 records + 2 padding rows
    assert view.range_text() == "1-3 of 3"
    assert view.table.item(2, 1).text() == "High"
    assert view.done_item(1).checkState() == Qt.CheckState.Checked
    assert not view.prev_button.isEnabled() and not view.next_button.isEnabled()


def test_header_click_sorts_and_flips(qtbot, sample_records):
    view, _ = _view(qtbot, sample_records)
    view._on_header_clicked(1)
    assert view.viewmodel.sort_state.direction is SortDirection.DESCENDING
    assert view.visible_names() == ["Walk dog", "Buy milk", "Read book"]
    header = view.table.horizontalHeader()
    assert header.sortIndicatorSection() == 1
    assert header.sortIndicatorOrder() == Qt.SortOrder.DescendingOrder
    view._on_header_clicked(0)
    assert view.viewmodel.sort_state.field is SortField.NAME
    view._on_header_clicked(3)  # delete column is not sortable
    assert view.viewmodel.sort_state.field is SortField.NAME


def test_checkbox_toggle_updates_viewmodel(qtbot, sample_records):
    view, repo = _view(qtbot, sample_records)
    view.done_item(0).setCheckState(Qt.CheckState.Checked)
    assert view.viewmodel.records[0].done is True
    assert repo.load()[0].done is True
    view.refresh()
    assert view.done_item(0).checkState() == Qt.CheckState.Checked


def test_delete_button_removes_row(qtbot, sample_records):
    view, repo = _view(qtbot, sample_records)
    # default order: a, c, b -> row 1 is "Read book"
    view.table.cellWidget(1, 3).click()
    assert [r.id for r in view.viewmodel.records] == ["a", "b"]
    assert repo.load() == view.viewmodel.records
    view.refresh()
    assert view.visible_names() == ["Buy milk", "Walk dog"]
    assert view.table.cellWidget(2, 3) is None  # padding row has no stale button


def test_pagination_controls(qtbot):
    records = tuple(Record(id=str(i), name=f"Task {i:02d}") for i in range(7))
    view, _ = _view(qtbot, records)
    assert view.range_text() == "1-5 of 7"
    assert view.next_button.isEnabled()
    view.next_button.click()
    assert view.range_text() == "6-7 of 7"
    assert view.row_count() == 5
    assert len(view.visible_names()) == 2
    view.page_size_combo.setCurrentIndex(view.page_size_combo.findData(10))
    assert view.viewmodel.page_state.page_index == 0
    assert view.row_count() == 10
    assert view.range_text() == "1-7 of 7"


def test_add_bar(qtbot):
    view, repo = _view(qtbot, ())
    assert not view.add_button.isEnabled()
    view.name_edit.setText("Water plants")
    assert view.add_button.isEnabled()
    view.priority_combo.setCurrentIndex(view.priority_combo.findData(2))
    view.add_button.click()
    assert view.visible_names() == ["Water plants"]
    assert repo.load()[0].priority == 2
    assert view.name_edit.text() == ""
