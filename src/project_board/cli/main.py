# src/project_board/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console board in the main thread.
"""

from __future__ import annotations

import logging

from ..board.errors import StoreError
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except StoreError as e:
        logger.error("Cannot open task store at %s: %s", settings.tasks_db_path, e)
        return 1

    try:
        run_console_loop(state)
    finally:
        # TaskStore uses short-lived sqlite connections per call; close is a no-op hook.
        state.task_store.close()
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
