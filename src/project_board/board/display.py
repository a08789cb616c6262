# board/display.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .models import TaskRecord

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


@dataclass(slots=True, frozen=True)
class TaskRow:
    """What a list view needs to draw one task."""

    id: int
    title: str
    body: str
    due_text: str
    overdue: bool


def is_overdue(record: TaskRecord, now: datetime | None = None) -> bool:
    """A task is overdue once its due date has passed. No due date: never."""
    if record.due_date is None:
        return False
    if now is None:
        now = datetime.now(timezone.utc)
    due = record.due_date
    # Mixed naive/aware comparisons raise; treat naive values as local time.
    if due.tzinfo is None:
        due = due.astimezone()
    if now.tzinfo is None:
        now = now.astimezone()
    return due < now


def format_due(record: TaskRecord, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    if record.due_date is None:
        return ""
    return record.due_date.astimezone().strftime(date_format)


def project_row(
    record: TaskRecord,
    *,
    now: datetime | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> TaskRow:
    return TaskRow(
        id=record.id,
        title=record.title,
        body=record.body,
        due_text=format_due(record, date_format),
        overdue=is_overdue(record, now),
    )


def project_rows(
    records: list[TaskRecord],
    *,
    now: datetime | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> list[TaskRow]:
    if now is None:
        now = datetime.now(timezone.utc)
    return [project_row(r, now=now, date_format=date_format) for r in records]
