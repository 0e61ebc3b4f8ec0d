"""Global configuration and constants for the task table."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("EPICTODO_DATA_DIR", "data")
STORAGE_BACKEND: Final = os.environ.get("EPICTODO_STORAGE_BACKEND", "json")
LOG_LEVEL: Final = os.environ.get("EPICTODO_LOG_LEVEL", "INFO")

# Key under which the record collection is stored in the key-value store
STORAGE_KEY: Final = "todos"
SQLITE_FILENAME: Final = "epictodo.sqlite"

PAGE_SIZE_OPTIONS: Final = (5, 10, 15)
DEFAULT_PAGE_SIZE: Final = 5
DEFAULT_SORT_FIELD: Final = "priority"
DEFAULT_SORT_DIRECTION: Final = "asc"

WINDOW_TITLE: Final = "Epic Todo List"
