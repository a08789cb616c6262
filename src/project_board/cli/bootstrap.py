# src/project_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store, the console view and the controller into AppState.
"""

from __future__ import annotations

import logging

from ..board.controller import BoardController
from ..board.store import TaskStore
from ..config import get_settings
from ..connectors.console_connector import ConsoleBoardView
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, view: ConsoleBoardView | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if view is None:
        view = ConsoleBoardView(
            color=bool(getattr(settings, "color", False)),
            app_name=str(getattr(settings, "app_name", "Project Manager")),
            date_format=settings.date_format,
        )

    store = TaskStore(settings.tasks_db_path)
    controller = BoardController(
        store,
        view,
        view,
        date_format=settings.date_format,
        refresh_on_cancel=settings.refresh_on_cancel,
    )
    logger.debug("State wired db=%s", settings.tasks_db_path)
    return AppState(settings=settings, task_store=store, controller=controller)
