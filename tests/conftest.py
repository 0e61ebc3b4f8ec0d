# Shared fixtures. Provides a fallback 'qtbot' fixture if pytest-qt is not installed;
# when pytest-qt is present its fixture wins. Qt always runs on the offscreen platform.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from domain.models import Record  # noqa: E402
from gui.repositories import InMemoryKeyValueStore, KeyValueRecordRepository  # noqa: E402
from gui.services.event_bus import EventBus  # noqa: E402
from gui.services.settings_service import SettingsService  # noqa: E402
from gui.viewmodels.task_table_viewmodel import TaskTableViewModel  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        QApplication.instance() or QApplication(sys.argv[:1])  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture
def sample_records():
    return (
        Record(id="a", name="Buy milk", priority=1, done=False),
        Record(id="b", name="Walk dog", priority=2, done=False),
        Record(id="c", name="Read book", priority=1, done=True),
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store, sample_records):
    repo = KeyValueRecordRepository(store)
    repo.save(sample_records)
    return repo


@pytest.fixture
def viewmodel(repository):
    vm = TaskTableViewModel(repository, event_bus=EventBus(), settings=SettingsService())
    vm.load()
    return vm
