# tests/test_partition.py

from __future__ import annotations

from project_board.board.models import TaskStatus
from project_board.board.partition import partition

from .fakes import record


def test_partition_scenario_drops_unknown_status() -> None:
    records = [record(1, "A", 0), record(2, "B", 1), record(3, "C", 9)]

    board = partition(records)

    assert [r.title for r in board.todo] == ["A"]
    assert [r.title for r in board.doing] == ["B"]
    assert board.done == []
    assert [r.id for r in board.unclassified] == [3]
    assert all(r.id != 3 for rows in board.buckets().values() for r in rows)


def test_partition_is_stable_exhaustive_and_disjoint() -> None:
    statuses = [2, 0, 1, 0, -1, 2, 1, 0, 7, 2]
    records = [record(i, f"t{i}", s) for i, s in enumerate(statuses, start=1)]

    board = partition(records)

    parts = [board.todo, board.doing, board.done, board.unclassified]
    ids = [r.id for part in parts for r in part]
    assert sorted(ids) == [r.id for r in records]
    assert len(ids) == len(set(ids))

    # Input order survives inside every bucket.
    for part in parts:
        part_ids = [r.id for r in part]
        assert part_ids == sorted(part_ids)

    assert [r.id for r in board.todo] == [2, 4, 8]
    assert [r.id for r in board.doing] == [3, 7]
    assert [r.id for r in board.done] == [1, 6, 10]
    assert [r.id for r in board.unclassified] == [5, 9]


def test_partition_empty_and_counts() -> None:
    board = partition([])
    assert board.counts() == {TaskStatus.TODO: 0, TaskStatus.DOING: 0, TaskStatus.DONE: 0}

    board = partition([record(1, "A", 0), record(2, "B", 0), record(3, "C", 2)])
    assert board.counts() == {TaskStatus.TODO: 2, TaskStatus.DOING: 0, TaskStatus.DONE: 1}
    assert [r.id for r in board.bucket(TaskStatus.TODO)] == [1, 2]
    assert board.bucket(TaskStatus.DONE) is board.done
