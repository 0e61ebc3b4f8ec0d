import json
import logging

from domain.models import Record
from gui.repositories import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueRecordRepository,
    RecordRepository,
)


def test_empty_store_loads_empty_collection():
    repo = KeyValueRecordRepository(InMemoryKeyValueStore())
    assert isinstance(repo, RecordRepository)
    assert repo.load() == ()


def test_save_then_load(tmp_path, sample_records):
    repo = KeyValueRecordRepository(JsonFileKeyValueStore(tmp_path))
    repo.save(sample_records)
    assert KeyValueRecordRepository(JsonFileKeyValueStore(tmp_path)).load() == sample_records


def test_payload_is_field_for_field(store, sample_records):
    KeyValueRecordRepository(store).save(sample_records[:1])
    assert json.loads(store.get("todos")) == [
        {"id": "a", "name": "Buy milk", "priority": 1, "done": False}
    ]


def test_custom_key(store, sample_records):
    KeyValueRecordRepository(store, key="work").save(sample_records)
    assert store.get("todos") is None
    assert KeyValueRecordRepository(store, key="work").load() == sample_records


def test_corrupt_payload_is_backed_up(store, caplog):
    store.set("todos", "{ not valid json")
    with caplog.at_level(logging.WARNING):
        assert KeyValueRecordRepository(store).load() == ()
    backups = [k for k in store.keys() if k.startswith("todos.corrupt.")]
    assert len(backups) == 1
    assert store.get(backups[0]) == "{ not valid json"
    assert "corrupt" in caplog.text


def test_non_list_payload_is_backed_up(store):
    store.set("todos", json.dumps({"id": "a"}))
    assert KeyValueRecordRepository(store).load() == ()
    assert any(k.startswith("todos.corrupt.") for k in store.keys())


def test_malformed_entries_and_duplicates_skipped(store):
    store.set(
        "todos",
        json.dumps(
            [
                {"id": "a", "name": "one", "priority": 0, "done": False},
                {"id": "b", "name": "bad"},
                {"id": "a", "name": "dup", "priority": 2, "done": True},
                {"id": "c", "name": "three", "priority": 2, "done": True},
            ]
        ),
    )
    loaded = KeyValueRecordRepository(store).load()
    assert loaded == (
        Record(id="a", name="one", priority=0, done=False),
        Record(id="c", name="three", priority=2, done=True),
    )


def test_undecodable_json_file_is_backed_up(tmp_path, caplog):
    raw = b'[{"id": "a", "name": "\xff\xfe", "priority": 0, "done": false}]'
    (tmp_path / "todos.json").write_bytes(raw)
    with caplog.at_level(logging.WARNING):
        assert KeyValueRecordRepository(JsonFileKeyValueStore(tmp_path)).load() == ()
    backups = list(tmp_path.glob("todos.corrupt.*.json"))
    assert len(backups) == 1
    assert backups[0].read_bytes() == raw
    assert "corrupt" in caplog.text
