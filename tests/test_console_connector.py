# tests/test_console_connector.py

from __future__ import annotations

import io
from datetime import datetime

from project_board.board.display import TaskRow
from project_board.board.models import TaskStatus
from project_board.connectors.console_connector import ConsoleBoardView
from project_board.core.ports import Cancelled, FormMode, FormRequest, Saved

from .fakes import record


def _view(answers: list[str]) -> tuple[ConsoleBoardView, io.StringIO]:
    out = io.StringIO()
    feed = iter(answers)

    def fake_input(prompt: str) -> str:
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    return ConsoleBoardView(input_func=fake_input, out=out), out


def test_create_form_returns_saved_draft() -> None:
    view, _ = _view(["Buy milk", "2 liters", "2030-01-05", "doing"])

    result = view.present_form(FormRequest(FormMode.CREATE))

    assert isinstance(result, Saved)
    draft = result.draft
    assert draft.title == "Buy milk"
    assert draft.body == "2 liters"
    assert draft.status is TaskStatus.DOING
    assert draft.due_date is not None
    assert draft.due_date.tzinfo is not None
    assert draft.due_date.strftime("%Y-%m-%d") == "2030-01-05"


def test_cancel_word_empty_title_and_eof_cancel_the_form() -> None:
    view, _ = _view(["Title", "/cancel"])
    assert isinstance(view.present_form(FormRequest(FormMode.CREATE)), Cancelled)

    view, out = _view([""])
    assert isinstance(view.present_form(FormRequest(FormMode.CREATE)), Cancelled)
    assert "nothing created" in out.getvalue()

    view, _ = _view(["Title"])
    assert isinstance(view.present_form(FormRequest(FormMode.CREATE)), Cancelled)


def test_edit_form_keeps_current_values_on_empty_input() -> None:
    due = datetime(2030, 1, 5, 9, 0).astimezone()
    rec = record(7, "Old", 1, body="old body", due_date=due)
    view, _ = _view(["", "", "", ""])

    result = view.present_form(FormRequest(FormMode.EDIT, rec))

    assert isinstance(result, Saved)
    assert result.draft.title == "Old"
    assert result.draft.body == "old body"
    assert result.draft.due_date == due
    assert result.draft.status is TaskStatus.DOING


def test_edit_form_can_clear_due_date_and_reprompts_bad_input() -> None:
    due = datetime(2030, 1, 5, 9, 0).astimezone()
    rec = record(7, "Old", 0, due_date=due)
    view, out = _view(["", "", "not-a-date", "-", "later", "done"])

    result = view.present_form(FormRequest(FormMode.EDIT, rec))

    assert isinstance(result, Saved)
    assert result.draft.due_date is None
    assert result.draft.status is TaskStatus.DONE
    text = out.getvalue()
    assert "Not a date" in text
    assert "Unknown status" in text


def test_edit_form_dash_clears_body() -> None:
    rec = record(7, "Old", 0, body="old body")
    view, _ = _view(["", "-", "", ""])

    result = view.present_form(FormRequest(FormMode.EDIT, rec))

    assert isinstance(result, Saved)
    assert result.draft.title == "Old"
    assert result.draft.body == ""

    view, _ = _view(["New", "-", "", ""])
    result = view.present_form(FormRequest(FormMode.CREATE))
    assert isinstance(result, Saved)
    assert result.draft.body == ""


def test_render_board_lays_out_three_columns() -> None:
    view, out = _view([])
    columns = {
        TaskStatus.TODO: [
            TaskRow(id=1, title="A", body="", due_text="2024-03-01", overdue=True),
        ],
        TaskStatus.DOING: [TaskRow(id=2, title="B", body="b body", due_text="", overdue=False)],
        TaskStatus.DONE: [],
    }

    view.render_board(columns)

    text = out.getvalue()
    assert "TODO (1)" in text
    assert "DOING (1)" in text
    assert "DONE (0)" in text
    assert "1. A" in text
    assert "2024-03-01 !" in text
    assert "b body" in text


def test_preview_and_error_output() -> None:
    view, out = _view([])
    view.show_preview(TaskRow(id=1, title="A", body="details", due_text="2024-03-01", overdue=True))
    view.show_error("boom")

    text = out.getvalue()
    assert "| A" in text
    assert "details" in text
    assert "due 2024-03-01 (overdue)" in text
    assert "[!] boom" in text
