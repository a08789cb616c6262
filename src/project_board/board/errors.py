# board/errors.py

from __future__ import annotations


class StoreError(Exception):
    """Base class for TaskStore failures. No operation is retried."""


class NotFoundError(StoreError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class StoreIOError(StoreError):
    """Underlying storage is inaccessible or corrupt (cause is the sqlite3 error)."""
