# src/project_board/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..board.controller import BoardController
from ..board.store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskStore
    controller: BoardController

    running: bool = True
