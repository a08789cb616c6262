# board/store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import NotFoundError, StoreIOError
from .models import UNKNOWN_STATUS, UNSET, TaskChanges, TaskDraft, TaskRecord, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Ids come from AUTOINCREMENT, so a deleted id is never handed out again.

    Thread-safety:
    - each method opens its own SQLite connection

    Every sqlite3 error is re-raised as StoreIOError.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreIOError(f"cannot open {self._db_path}: {e}") from e
        try:
            conn.row_factory = sqlite3.Row
            self._configure_conn(conn)
            yield conn
        except sqlite3.Error as e:
            raise StoreIOError(f"{self._db_path}: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL DEFAULT '',
                    body TEXT NOT NULL DEFAULT '',
                    due_at REAL,
                    status INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("body", "TEXT NOT NULL DEFAULT ''")
            add_col("due_at", "REAL")
            add_col("status", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()

    @staticmethod
    def _date_to_ts(value: datetime | None) -> float | None:
        if value is None:
            return None
        # Reads come back in UTC; a naive value would not survive the trip.
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"due_date must be timezone-aware, got {value!r}")
        return value.timestamp()

    @staticmethod
    def _ts_to_date(ts: float | None) -> datetime | None:
        if ts is None:
            return None
        return datetime.fromtimestamp(float(ts), tz=timezone.utc)

    @staticmethod
    def _checked_status(status: Any) -> int:
        try:
            return int(TaskStatus(int(status)))
        except (TypeError, ValueError):
            raise ValueError(f"status must be one of {[s.value for s in TaskStatus]}, got {status!r}") from None

    @staticmethod
    def _row_status(task_id: int, raw: Any) -> int:
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Task id=%s has non-integer status %r", task_id, raw)
            return UNKNOWN_STATUS

    def _row_to_task(self, row: sqlite3.Row) -> TaskRecord:
        task_id = int(row["id"])
        return TaskRecord(
            id=task_id,
            title=str(row["title"] or ""),
            body=str(row["body"] or ""),
            due_date=self._ts_to_date(row["due_at"]),
            status=self._row_status(task_id, row["status"]),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def fetch_all(self) -> list[TaskRecord]:
        """Every stored task, in insertion (id) order."""
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]

    def get(self, task_id: int) -> TaskRecord:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
            if row is None:
                raise NotFoundError(task_id)
            return self._row_to_task(row)

    def create(self, draft: TaskDraft) -> TaskRecord:
        status = self._checked_status(draft.status)
        now = time.time()

        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(title, body, due_at, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    draft.title or "",
                    draft.body or "",
                    self._date_to_ts(draft.due_date),
                    status,
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreIOError("SQLite did not return lastrowid for tasks insert")

        task_id = int(rowid)
        logger.debug("Task created id=%s status=%s due=%s", task_id, status, draft.due_date)
        return self.get(task_id)

    def update(self, task_id: int, changes: TaskChanges) -> None:
        if changes.is_empty():
            # Nothing to write, but a missing id is still an error.
            self.get(task_id)
            return

        fields: list[str] = []
        params: list[Any] = []

        if changes.title is not UNSET:
            fields.append("title = ?")
            params.append(str(changes.title or ""))

        if changes.body is not UNSET:
            fields.append("body = ?")
            params.append(str(changes.body or ""))

        if changes.due_date is not UNSET:
            fields.append("due_at = ?")
            params.append(self._date_to_ts(changes.due_date))

        if changes.status is not UNSET:
            fields.append("status = ?")
            params.append(self._checked_status(changes.status))

        fields.append("updated_at = ?")
        params.append(time.time())
        params.append(int(task_id))

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"

        with self._connect() as conn:
            cur = conn.execute(sql, params)
            conn.commit()
            if cur.rowcount != 1:
                raise NotFoundError(task_id)
        logger.debug("Task updated id=%s fields=%s", task_id, len(fields) - 1)

    def delete(self, task_id: int) -> None:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            if cur.rowcount != 1:
                raise NotFoundError(task_id)
        logger.debug("Task deleted id=%s", task_id)
