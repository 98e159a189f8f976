# tests/test_logging_setup.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from pocket_todo.logging_setup import LOG_FILE_NAME, _PromptFilter, setup_logging


@pytest.fixture()
def restore_root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """Let setup_logging work on a throwaway handler list."""
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(root, "handlers", [])
    yield root
    for h in root.handlers:
        h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def _file_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if isinstance(h, logging.FileHandler)]


def test_writes_log_file_in_data_dir(tmp_path: Path, restore_root_logger: logging.Logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "data")

    assert log_file == tmp_path / "data" / LOG_FILE_NAME
    assert log_file.exists()
    assert len(_file_handlers(restore_root_logger)) == 1


def test_unusable_log_dir_falls_back_to_console(tmp_path: Path, restore_root_logger: logging.Logger) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    log_file = setup_logging(log_dir=blocker / "data")  # must not raise

    assert log_file is None
    assert _file_handlers(restore_root_logger) == []
    assert len(restore_root_logger.handlers) == 1


def _record(name: str, level: int, *, thread: int | None = None) -> logging.LogRecord:
    record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    if thread is not None:
        record.thread = thread
    return record


def test_prompt_filter_keeps_timer_chatter_off_the_console() -> None:
    f = _PromptFilter()
    main_ident = threading.main_thread().ident
    other_ident = (main_ident or 0) + 1

    assert f.filter(_record("pocket_todo.tasks.task_store", logging.INFO, thread=main_ident))
    assert not f.filter(_record("pocket_todo.core.notifications", logging.DEBUG, thread=other_ident))
    assert f.filter(_record("pocket_todo.core.notifications", logging.WARNING, thread=other_ident))

    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
