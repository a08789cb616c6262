# board/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Final


class TaskStatus(IntEnum):
    """
    Board column a task lives in.

    Stored as a small integer. Rows written by older builds may carry any other
    value; those are "unclassified" and never land in a column.
    """

    TODO = 0
    DOING = 1
    DONE = 2

    @classmethod
    def from_db(cls, raw: int | None) -> TaskStatus | None:
        if raw is None:
            return None
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return None

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Accept "todo"/"doing"/"done" (any case) or "0"/"1"/"2"."""
        s = (raw or "").strip()
        if s.isdigit():
            return cls(int(s))
        try:
            return cls[s.upper()]
        except KeyError:
            raise ValueError(f"unknown status: {raw!r}") from None


class _Unset:
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

# Stored status that is not even an integer; never a TaskStatus value.
UNKNOWN_STATUS: Final = -1


@dataclass(slots=True)
class TaskRecord:
    id: int
    title: str
    body: str
    due_date: datetime | None
    status: int

    created_at: float = 0.0
    updated_at: float = 0.0

    @property
    def bucket(self) -> TaskStatus | None:
        return TaskStatus.from_db(self.status)


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Everything needed to create a record; the store assigns the id."""

    title: str
    body: str = ""
    due_date: datetime | None = None
    status: TaskStatus = TaskStatus.TODO


@dataclass(slots=True, frozen=True)
class TaskChanges:
    """
    Partial update.

    Fields left as UNSET are not touched. `due_date=None` clears the due date.
    """

    title: Any = UNSET
    body: Any = UNSET
    due_date: Any = UNSET
    status: Any = UNSET

    def is_empty(self) -> bool:
        return all(
            v is UNSET for v in (self.title, self.body, self.due_date, self.status)
        )

    def apply(self, record: TaskRecord) -> TaskRecord:
        """Return a copy of `record` with these changes applied (id kept)."""
        return TaskRecord(
            id=record.id,
            title=record.title if self.title is UNSET else self.title,
            body=record.body if self.body is UNSET else self.body,
            due_date=record.due_date if self.due_date is UNSET else self.due_date,
            status=record.status if self.status is UNSET else int(self.status),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
