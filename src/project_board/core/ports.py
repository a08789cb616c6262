# src/project_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board controller.

The controller depends on Protocols instead of concrete implementations.
This keeps the storage and the presentation layer swappable and makes testing easier.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..board.display import TaskRow
from ..board.models import TaskChanges, TaskDraft, TaskRecord, TaskStatus


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass(slots=True, frozen=True)
class FormRequest:
    mode: FormMode
    # Pre-filled values for EDIT; None for CREATE.
    record: TaskRecord | None = None


@dataclass(slots=True, frozen=True)
class Saved:
    draft: TaskDraft


@dataclass(slots=True, frozen=True)
class Cancelled:
    pass


FormResult = Saved | Cancelled
# What a form hands back to whoever presented it. Replaces a global "dismissed" broadcast.


class TaskRepo(Protocol):
    def fetch_all(self) -> list[TaskRecord]: ...
    def create(self, draft: TaskDraft) -> TaskRecord: ...
    def update(self, task_id: int, changes: TaskChanges) -> None: ...
    def delete(self, task_id: int) -> None: ...


class BoardView(Protocol):
    """
    Presentation-side port: how the controller draws the board.

    render_board gets all three columns at once, so a fetch never shows up as
    a half-updated board.
    """

    def render_board(self, columns: dict[TaskStatus, list[TaskRow]]) -> None: ...
    def render_bucket(self, status: TaskStatus, rows: list[TaskRow]) -> None: ...
    def show_preview(self, row: TaskRow) -> None: ...
    def show_error(self, message: str) -> None: ...


class FormPresenter(Protocol):
    def present_form(self, request: FormRequest) -> FormResult: ...
