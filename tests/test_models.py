import pytest

from domain.errors import InvalidPageSizeError, RecordFormatError
from domain.models import PageState, Priority, Record, SortDirection, SortField, SortState


def test_priority_labels():
    assert Priority.label_for(2) == "High"
    assert Priority.label_for(0) == "Low"
    assert Priority.label_for(7) == "7"
    assert Priority.from_label(" medium ") is Priority.MEDIUM
    with pytest.raises(ValueError):
        Priority.from_label("urgent")


def test_record_dict_shape():
    rec = Record(id="a", name="Buy milk", priority=1, done=False)
    assert rec.to_dict() == {"id": "a", "name": "Buy milk", "priority": 1, "done": False}
    assert Record.from_dict(rec.to_dict()) == rec
    assert rec.priority_label == "Medium"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "x", "priority": 0, "done": False},
        {"id": "", "name": "x", "priority": 0, "done": False},
        {"id": "a", "name": "x", "priority": True, "done": False},
        {"id": "a", "name": "x", "priority": 42, "done": False},
        {"id": "a", "name": "x", "priority": 1.0, "done": False},
        {"id": "a", "name": "x", "priority": 0, "done": "no"},
        ["a", "x"],
    ],
)
def test_record_from_dict_rejects_bad_payload(payload):
    with pytest.raises(RecordFormatError):
        Record.from_dict(payload)


def test_sort_state_selection():
    state = SortState()
    assert state.field is SortField.PRIORITY
    assert state.direction is SortDirection.ASCENDING
    flipped = state.select("priority")
    assert flipped.direction is SortDirection.DESCENDING
    assert flipped.select(SortField.PRIORITY).direction is SortDirection.ASCENDING
    other = flipped.select(SortField.NAME)
    assert other == SortState(SortField.NAME, SortDirection.ASCENDING)


def test_page_state_rules():
    state = PageState(page_index=0, page_size=5)
    moved = state.with_page(2, total=12)
    assert moved.page_index == 2
    assert state.with_page(9, total=12).page_index == 2
    assert state.with_page(-3, total=12).page_index == 0
    resized = moved.with_page_size(10)
    assert resized == PageState(page_index=0, page_size=10)
    with pytest.raises(InvalidPageSizeError):
        state.with_page_size(7)


def test_page_state_clamped_keeps_window_inside_collection():
    state = PageState(page_index=2, page_size=5)
    assert state.clamped(11) is state
    assert state.clamped(10).page_index == 1
    assert state.clamped(0).page_index == 0
