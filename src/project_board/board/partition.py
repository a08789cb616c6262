# board/partition.py

from __future__ import annotations

"""
Board model: the three status columns derived from a full fetch.

The model is a throwaway projection of the store. It is rebuilt from scratch
on every fetch and never patched field by field.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import TaskRecord, TaskStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoardModel:
    todo: list[TaskRecord] = field(default_factory=list)
    doing: list[TaskRecord] = field(default_factory=list)
    done: list[TaskRecord] = field(default_factory=list)

    # Records whose stored status is not a TaskStatus. Shown nowhere.
    unclassified: list[TaskRecord] = field(default_factory=list)

    def bucket(self, status: TaskStatus) -> list[TaskRecord]:
        if status == TaskStatus.TODO:
            return self.todo
        if status == TaskStatus.DOING:
            return self.doing
        return self.done

    def buckets(self) -> dict[TaskStatus, list[TaskRecord]]:
        return {s: self.bucket(s) for s in TaskStatus}

    def counts(self) -> dict[TaskStatus, int]:
        return {s: len(self.bucket(s)) for s in TaskStatus}


def partition(records: Iterable[TaskRecord]) -> BoardModel:
    """Split records into TODO/DOING/DONE in one pass, keeping input order."""
    board = BoardModel()
    for rec in records:
        status = rec.bucket
        if status is None:
            board.unclassified.append(rec)
            continue
        board.bucket(status).append(rec)

    if board.unclassified:
        logger.warning(
            "Skipping %d task(s) with unknown status: %s",
            len(board.unclassified),
            ", ".join(f"id={r.id} status={r.status}" for r in board.unclassified),
        )
    return board
