"""GUI view layer.

Exports:
 - TaskTableView
"""

from .task_table_view import TaskTableView  # noqa: F401
