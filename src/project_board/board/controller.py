# board/controller.py

from __future__ import annotations

"""
Board controller.

Owns the board screen:
- fetches every task, partitions it into columns and renders them in one go,
- opens the create/edit form and acts on its typed result (Saved / Cancelled),
- deletes, moves and previews rows addressed by (column, index).

Store failures never escape: they are logged, shown through the view, and the
board keeps its last-known state.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from ..core.ports import (
    BoardView,
    Cancelled,
    FormMode,
    FormPresenter,
    FormRequest,
    FormResult,
    Saved,
    TaskRepo,
)
from .display import DEFAULT_DATE_FORMAT, TaskRow, project_row, project_rows
from .errors import NotFoundError, StoreError
from .models import TaskChanges, TaskRecord, TaskStatus
from .partition import BoardModel, partition

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    IDLE = "idle"
    PRESENTING = "presenting"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BoardController:
    def __init__(
        self,
        repo: TaskRepo,
        view: BoardView,
        forms: FormPresenter,
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
        refresh_on_cancel: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repo = repo
        self._view = view
        self._forms = forms
        self._date_format = date_format
        self._refresh_on_cancel = refresh_on_cancel
        self._clock = clock

        self._board = BoardModel()
        self._state = ControllerState.IDLE

        # Single-flight: one fetch at a time, later requests coalesce into one rerun.
        self._fetch_lock = threading.Lock()
        self._refresh_pending = False

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def board(self) -> BoardModel:
        return self._board

    # ---- fetch / render ----

    def load(self) -> None:
        """Initial fetch when the board screen comes up."""
        self.refresh()

    def refresh(self) -> None:
        if not self._fetch_lock.acquire(blocking=False):
            self._refresh_pending = True
            logger.debug("Refresh requested during an in-flight fetch; coalesced.")
            return

        try:
            while True:
                self._refresh_pending = False
                self._fetch_and_render()
                if not self._refresh_pending:
                    break
        finally:
            self._fetch_lock.release()

    def _fetch_and_render(self) -> None:
        try:
            records = self._repo.fetch_all()
        except StoreError as e:
            logger.error("Fetch failed, keeping last board: %s", e)
            self._view.show_error(f"Could not load tasks: {e}")
            return

        self._board = partition(records)
        counts = self._board.counts()
        logger.debug(
            "Board rebuilt todo=%d doing=%d done=%d unclassified=%d",
            counts[TaskStatus.TODO],
            counts[TaskStatus.DOING],
            counts[TaskStatus.DONE],
            len(self._board.unclassified),
        )
        self._view.render_board(self.columns())

    def redraw(self) -> None:
        """Draw the current board again without fetching."""
        self._view.render_board(self.columns())

    def columns(self) -> dict[TaskStatus, list[TaskRow]]:
        now = self._clock()
        return {
            status: project_rows(records, now=now, date_format=self._date_format)
            for status, records in self._board.buckets().items()
        }

    # ---- helpers ----

    def _row(self, status: TaskStatus, index: int) -> TaskRecord:
        bucket = self._board.bucket(status)
        if not 0 <= index < len(bucket):
            raise IndexError(f"{status.name} has no row {index + 1}")
        return bucket[index]

    def _require_idle(self) -> None:
        if self._state is not ControllerState.IDLE:
            raise RuntimeError("another form or preview is already open")

    def _report(self, what: str, exc: Exception) -> None:
        logger.warning("%s: %s", what, exc)
        self._view.show_error(f"{what}: {exc}")

    # ---- user intents ----

    def request_add(self) -> FormResult:
        self._require_idle()
        self._state = ControllerState.PRESENTING
        try:
            result = self._forms.present_form(FormRequest(FormMode.CREATE))
            if isinstance(result, Saved):
                try:
                    record = self._repo.create(result.draft)
                except (StoreError, ValueError) as e:
                    self._report("Could not create task", e)
                else:
                    logger.info("Task created id=%s title=%r", record.id, record.title)
                    self.refresh()
            elif self._refresh_on_cancel:
                self.refresh()
            return result
        finally:
            self._state = ControllerState.IDLE

    def request_edit(self, status: TaskStatus, index: int) -> FormResult:
        self._require_idle()
        record = self._row(status, index)

        self._state = ControllerState.PRESENTING
        try:
            result = self._forms.present_form(FormRequest(FormMode.EDIT, record))
            if isinstance(result, Cancelled):
                if self._refresh_on_cancel:
                    self.refresh()
                return result

            draft = result.draft
            changes = TaskChanges(
                title=draft.title,
                body=draft.body,
                due_date=draft.due_date,
                status=draft.status,
            )
            try:
                self._repo.update(record.id, changes)
            except NotFoundError as e:
                # Row vanished underneath us; show the store's view of things.
                self._report("Could not update task", e)
                self.refresh()
            except (StoreError, ValueError) as e:
                self._report("Could not update task", e)
            else:
                logger.info("Task updated id=%s", record.id)
                self.refresh()
            return result
        finally:
            self._state = ControllerState.IDLE

    def request_delete(self, status: TaskStatus, index: int) -> TaskRecord | None:
        """
        Remove the row from its column and from the store.

        Only that column is re-rendered. If the store refuses, the column is
        put back exactly as it was and None is returned.
        """
        self._require_idle()
        self._row(status, index)

        bucket = self._board.bucket(status)
        removed = bucket.pop(index)
        try:
            self._repo.delete(removed.id)
        except StoreError as e:
            bucket.insert(index, removed)
            self._report("Could not delete task", e)
            return None

        logger.info("Task deleted id=%s from %s", removed.id, status.name)
        self._view.render_bucket(
            status, project_rows(bucket, now=self._clock(), date_format=self._date_format)
        )
        return removed

    def request_move(self, status: TaskStatus, index: int, target: TaskStatus) -> bool:
        self._require_idle()
        record = self._row(status, index)
        if target == status:
            return False

        try:
            self._repo.update(record.id, TaskChanges(status=target))
        except StoreError as e:
            self._report("Could not move task", e)
            return False

        logger.info("Task moved id=%s %s -> %s", record.id, status.name, target.name)
        self.refresh()
        return True

    def request_preview(self, index: int, status: TaskStatus = TaskStatus.TODO) -> TaskRow:
        self._require_idle()
        record = self._row(status, index)
        row = project_row(record, now=self._clock(), date_format=self._date_format)

        self._state = ControllerState.PRESENTING
        try:
            self._view.show_preview(row)
        finally:
            self._state = ControllerState.IDLE
        return row
