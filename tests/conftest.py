# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from project_board.board.controller import BoardController
from project_board.board.store import TaskStore
from project_board.core.state import AppState

from .fakes import FakeBoardView, ScriptedFormPresenter


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Project Manager",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        date_format="%Y-%m-%d",
        refresh_on_cancel=False,
        color=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def view() -> FakeBoardView:
    return FakeBoardView()


@pytest.fixture()
def forms() -> ScriptedFormPresenter:
    return ScriptedFormPresenter()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TaskStore,
    view: FakeBoardView,
    forms: ScriptedFormPresenter,
) -> AppState:
    """
    AppState wired with a fake view and scripted forms.

    NOTE: We keep the real SQLite TaskStore here because its correctness is
    part of what we want to test.
    """
    controller = BoardController(
        store,
        view,
        forms,
        date_format=settings.date_format,
        refresh_on_cancel=settings.refresh_on_cancel,
    )
    controller.load()
    return AppState(settings=settings, task_store=store, controller=controller)
