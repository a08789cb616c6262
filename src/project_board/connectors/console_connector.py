# src/project_board/connectors/console_connector.py

from __future__ import annotations

import logging
import re
import shutil
import sys
import textwrap
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from ..board.display import DEFAULT_DATE_FORMAT, TaskRow
from ..board.models import TaskDraft, TaskRecord, TaskStatus
from ..cli.commands import registry as command_registry
from ..core.ports import Cancelled, FormMode, FormRequest, FormResult, Saved
from ..core.state import AppState

logger = logging.getLogger(__name__)

MIN_COL_WIDTH = 18
SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"

CANCEL_WORDS = ("/cancel", "/c")


class _FormCancelled(Exception):
    pass


def _visible_len(s: str) -> int:
    return len(ANSI_RE.sub("", s))


def _pad(s: str, width: int) -> str:
    pad = width - _visible_len(s)
    return s + " " * pad if pad > 0 else s


class ConsoleBoardView:
    """
    Terminal presentation layer.

    Implements both BoardView (draws the three columns) and FormPresenter
    (a prompt-per-field create/edit form). Input and output are injectable so
    the view can be driven from tests.
    """

    def __init__(
        self,
        *,
        color: bool = False,
        app_name: str = "Project Manager",
        date_format: str = DEFAULT_DATE_FORMAT,
        input_func: Callable[[str], str] = input,
        out: TextIO | None = None,
    ) -> None:
        self._color = color
        self._app_name = app_name
        self._date_format = date_format
        self._input = input_func
        self._out = out
        self._columns: dict[TaskStatus, list[TaskRow]] = {s: [] for s in TaskStatus}

    # ---- output helpers ----

    def _print(self, text: str = "") -> None:
        print(text, file=self._out or sys.stdout)

    def _style(self, text: str, *codes: str) -> str:
        if not self._color or not codes:
            return text
        return "".join(codes) + text + RESET

    def _width(self) -> int:
        total = shutil.get_terminal_size((100, 24)).columns
        return max(MIN_COL_WIDTH, (total - 2 * len(SEP)) // 3)

    def _header(self, status: TaskStatus, count: int) -> str:
        return self._style(f"{status.name} ({count})", BOLD)

    def _row_lines(self, n: int, row: TaskRow, width: int) -> list[str]:
        prefix = f"{n}. "
        indent = " " * len(prefix)
        title = row.title or "<untitled>"
        lines = textwrap.wrap(title, max(1, width - len(prefix))) or [""]
        out = [prefix + lines[0]] + [indent + ln for ln in lines[1:]]

        if row.body:
            body = textwrap.shorten(row.body, max(4, width - len(indent)), placeholder="...")
            out.append(indent + self._style(body, DIM))
        if row.due_text:
            due = row.due_text
            if row.overdue:
                due = self._style(due, RED) if self._color else f"{due} !"
            out.append(indent + due)
        return out

    def _column_lines(self, rows: list[TaskRow], width: int) -> list[str]:
        lines: list[str] = []
        for n, row in enumerate(rows, start=1):
            lines.extend(self._row_lines(n, row, width))
        return lines

    # ---- BoardView ----

    def render_board(self, columns: dict[TaskStatus, list[TaskRow]]) -> None:
        self._columns = {s: list(columns.get(s, [])) for s in TaskStatus}
        width = self._width()

        self._print(self._style(self._app_name, BOLD))
        self._print(SEP.join(_pad(self._header(s, len(self._columns[s])), width) for s in TaskStatus))
        self._print(SEP.join("-" * width for _ in TaskStatus))

        wrapped = {s: self._column_lines(self._columns[s], width) for s in TaskStatus}
        height = max(len(v) for v in wrapped.values())
        for i in range(height):
            cells = [
                _pad(wrapped[s][i], width) if i < len(wrapped[s]) else " " * width
                for s in TaskStatus
            ]
            self._print(SEP.join(cells).rstrip())
        self._print()

    def render_bucket(self, status: TaskStatus, rows: list[TaskRow]) -> None:
        self._columns[status] = list(rows)
        width = self._width()
        self._print(self._header(status, len(rows)))
        self._print("-" * width)
        for line in self._column_lines(rows, width):
            self._print(line)
        self._print()

    def show_preview(self, row: TaskRow) -> None:
        width = self._width()
        border = "+" + "-" * (width + 2) + "+"
        self._print(border)
        body = [self._style(row.title or "<untitled>", BOLD)]
        body.extend(textwrap.wrap(row.body, width) if row.body else [])
        if row.due_text:
            due = f"due {row.due_text}"
            if row.overdue:
                due = self._style(due, RED) if self._color else f"{due} (overdue)"
            body.append(due)
        for line in body:
            self._print(f"| {_pad(line, width)} |")
        self._print(border)

    def show_error(self, message: str) -> None:
        self._print(self._style(f"[!] {message}", RED))

    # ---- FormPresenter ----

    def _ask(self, label: str, current: str = "") -> str:
        hint = f" [{current}]" if current else ""
        raw = self._input(f"{label}{hint}: ")
        if raw.strip().lower() in CANCEL_WORDS:
            raise _FormCancelled()
        return raw.strip()

    def _ask_due(self, record: TaskRecord | None) -> datetime | None:
        current = ""
        if record is not None and record.due_date is not None:
            current = record.due_date.astimezone().strftime(self._date_format)

        while True:
            raw = self._ask(f"Due date ({self._date_format}, '-' clears)", current)
            if not raw:
                return record.due_date if record is not None else None
            if raw == "-":
                return None
            try:
                # Entered dates are local; attach the local zone.
                return datetime.strptime(raw, self._date_format).astimezone()
            except ValueError:
                self.show_error(f"Not a date in {self._date_format} format: {raw}")

    def _ask_status(self, record: TaskRecord | None) -> TaskStatus:
        current = TaskStatus.TODO
        if record is not None and record.bucket is not None:
            current = record.bucket

        while True:
            raw = self._ask("Status (todo/doing/done)", current.name.lower())
            if not raw:
                return current
            try:
                return TaskStatus.parse(raw)
            except ValueError:
                self.show_error(f"Unknown status: {raw}")

    def present_form(self, request: FormRequest) -> FormResult:
        record = request.record
        if request.mode is FormMode.CREATE:
            self._print(self._style("New task", BOLD) + "  (type /cancel to abort)")
        else:
            assert record is not None
            self._print(self._style(f"Edit task #{record.id}", BOLD) + "  (empty keeps current, /cancel aborts)")

        try:
            title = self._ask("Title", record.title if record else "")
            if not title:
                if record is None:
                    self._print("Empty title, nothing created.")
                    return Cancelled()
                title = record.title
            body = self._ask("Body ('-' clears)", record.body if record else "")
            if body == "-":
                body = ""
            elif not body and record is not None:
                body = record.body
            due_date = self._ask_due(record)
            status = self._ask_status(record)
        except (_FormCancelled, EOFError, KeyboardInterrupt):
            self._print("Cancelled.")
            return Cancelled()

        return Saved(TaskDraft(title=title, body=body, due_date=due_date, status=status))


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    state.controller.load()

    def emit(text: str) -> None:
        print(text, flush=True)

    print("Type /help for commands, /exit to quit.\n")

    while state.running:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            cmd_response = "Commands start with '/'. Use /help to list them."
        if cmd_response:
            print(cmd_response)

    logger.info("Console connector finished.")
