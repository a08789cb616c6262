# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "BOARD_APP_NAME": "Title shown above the board (default: Project Manager).",
    "BOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Board behaviour
    "BOARD_DATE_FORMAT": "strftime format for due dates, shown and typed (default: %Y-%m-%d).",
    "BOARD_REFRESH_ON_CANCEL": "Reload the board after a cancelled form too (default: false).",
    "BOARD_COLOR": "ANSI colors on/off (default: on for a TTY unless NO_COLOR is set).",
    # Paths (gitignored)
    "BOARD_DATA_DIR": "Local data directory for the database and board.log (default: .local/board).",
    "BOARD_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}
