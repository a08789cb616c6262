# src/project_board/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..board.models import TaskStatus
from ..core.ports import Saved
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_row(args: list[str]) -> tuple[TaskStatus, int]:
    """("todo", "2") -> (TaskStatus.TODO, 1). Rows are 1-based for the user."""
    if len(args) < 2:
        raise ValueError("expected <column> <row>")
    status = TaskStatus.parse(args[0])
    try:
        row = int(args[1])
    except ValueError:
        raise ValueError(f"row must be a number, got {args[1]!r}") from None
    if row < 1:
        raise ValueError("rows start at 1")
    return status, row - 1


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str]) -> str:
    """Redraw the board from memory (no fetch)."""
    state.controller.redraw()
    return ""


def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit is not None:
        emit(f"Reloading from {getattr(state.settings, 'tasks_db_path', 'store')}...")
    state.controller.refresh()
    return ""


def cmd_status(state: AppState, args: list[str]) -> str:
    board = state.controller.board
    counts = board.counts()
    db_path = getattr(state.settings, "tasks_db_path", "?")
    lines = [
        "Status:",
        f"  Database: {db_path}",
        "  " + ", ".join(f"{s.name}: {counts[s]}" for s in TaskStatus),
    ]
    if board.unclassified:
        ids = ", ".join(str(r.id) for r in board.unclassified)
        lines.append(f"  Hidden (unknown status): {len(board.unclassified)} [ids: {ids}]")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    result = state.controller.request_add()
    return "" if isinstance(result, Saved) else "Nothing created."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <column> <row>   -> open the edit form for that row
    """
    try:
        status, index = _parse_row(args)
        state.controller.request_edit(status, index)
    except (ValueError, IndexError) as e:
        return f"Usage: /edit <todo|doing|done> <row> ({e})"
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /delete <column> <row>   -> delete that row from the board and the store
    """
    try:
        status, index = _parse_row(args)
        removed = state.controller.request_delete(status, index)
    except (ValueError, IndexError) as e:
        return f"Usage: /delete <todo|doing|done> <row> ({e})"
    if removed is None:
        return ""
    return f"Deleted #{removed.id} {removed.title!r}."


def cmd_move(state: AppState, args: list[str]) -> str:
    """
    /move <column> <row> <target column>
    """
    try:
        status, index = _parse_row(args)
        if len(args) < 3:
            raise ValueError("missing target column")
        target = TaskStatus.parse(args[2])
        moved = state.controller.request_move(status, index, target)
    except (ValueError, IndexError) as e:
        return f"Usage: /move <todo|doing|done> <row> <todo|doing|done> ({e})"
    return "" if moved else "Nothing to move."


def cmd_preview(state: AppState, args: list[str]) -> str:
    """
    /preview <row>            -> quick look at a TODO row
    /preview <column> <row>   -> quick look at a row in another column
    """
    try:
        if len(args) == 1:
            status, index = _parse_row(["todo", args[0]])
        else:
            status, index = _parse_row(args)
        state.controller.request_preview(index, status)
    except (ValueError, IndexError) as e:
        return f"Usage: /preview [column] <row> ({e})"
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("board", cmd_board, help_text="Redraw the board.", aliases=["b"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the store.", aliases=["r"])
registry.register("status", cmd_status, help_text="Show task counts and the database path.")
registry.register("add", cmd_add, help_text="Create a task: /add (opens a form).", aliases=["new"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <column> <row>.")
registry.register(
    "delete", cmd_delete, help_text="Delete a task: /delete <column> <row>.", aliases=["rm", "del"]
)
registry.register("move", cmd_move, help_text="Move a task: /move <column> <row> <target>.", aliases=["mv"])
registry.register("preview", cmd_preview, help_text="Quick look: /preview [column] <row>.", aliases=["p"])
