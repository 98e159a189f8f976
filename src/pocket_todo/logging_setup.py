# src/pocket_todo/logging_setup.py

"""
Logging for an interactive terminal app.

stderr shares the terminal with the prompt, so it only gets what the user
should see; the log file under the data directory gets everything. The file
is optional: an unusable data directory must not stop the app from starting.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

LOG_FILE_NAME = "pocket_todo.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def _is_app_logger(name: str) -> bool:
    return name == "pocket_todo" or name.startswith("pocket_todo.")


class _PromptFilter(logging.Filter):
    """
    Decide what may be printed over the REPL prompt:
    - app records from the main thread pass (the handler level still applies)
    - app records from background threads (notification timers) need WARNING+
    - everything else (third-party, py.warnings) needs ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not _is_app_logger(record.name):
            return record.levelno >= logging.ERROR
        if record.thread != threading.main_thread().ident:
            return record.levelno >= logging.WARNING
        return True


def _open_log_file(log_dir: Path, level: int) -> logging.Handler:
    """Raises OSError if the directory or the file cannot be created."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/pocket_todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Install the console and file handlers on the root logger, replacing any
    existing ones. Returns the log file path, or None when file logging could
    not be set up (the app then logs to stderr only).
    """
    log_dir = Path(log_dir)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_PromptFilter())
    root.addHandler(console)

    logging.captureWarnings(True)

    try:
        file_handler = _open_log_file(log_dir, file_level)
    except OSError as e:
        logger.warning("File logging disabled, cannot write to %s: %s", log_dir, e)
        return None

    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
    return log_dir / LOG_FILE_NAME
