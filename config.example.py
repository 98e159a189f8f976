# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "POCKET_TODO_APP_NAME": "Title printed when the console starts (default: TODO App).",
    "POCKET_TODO_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "POCKET_TODO_DATA_DIR": "Local data directory (default: .local/pocket_todo).",
    "POCKET_TODO_KV_DB_PATH": "Key/value SQLite path (default: <data_dir>/storage.sqlite3).",
    # Storage keys
    "POCKET_TODO_TASKS_KEY": "Key holding the JSON task list (default: todos).",
    "POCKET_TODO_THEME_KEY": "Key holding the dark-mode flag (default: darkMode).",
    # Behaviour
    "POCKET_TODO_NOTIFICATION_SECONDS": "How long a notification stays visible (default: 2.0).",
    "POCKET_TODO_TITLE_MAX_LENGTH": "Maximum task title length (default: 100).",
    "POCKET_TODO_PREFER_DARK": (
        "Host dark-mode preference used when no theme was ever saved (true/false; "
        "unset => detect from COLORFGBG)."
    ),
    # Rendering
    "NO_COLOR": "Disable ANSI colors.",
    "FORCE_COLOR": "Force ANSI colors even when stdout is not a TTY.",
}
