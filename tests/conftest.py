# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_todo.cli.bootstrap import create_initial_state
from pocket_todo.core.notifications import NotificationCenter
from pocket_todo.core.state import AppState
from pocket_todo.storage.kv_store import KeyValueStore

from .fakes import FakeHost, ManualTimerFactory, RecordingNotifier


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Rendering assertions compare plain text, so keep ANSI colors off."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="TODO App",
        log_level="WARNING",
        data_dir=tmp_path,
        kv_db_path=tmp_path / "storage.sqlite3",
        tasks_key="todos",
        theme_key="darkMode",
        notification_seconds=2.0,
        title_max_length=100,
        prefer_dark=None,
    )


@pytest.fixture()
def timers() -> ManualTimerFactory:
    return ManualTimerFactory()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def kv(settings: SimpleNamespace) -> KeyValueStore:
    return KeyValueStore(settings.kv_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: KeyValueStore, timers: ManualTimerFactory) -> AppState:
    """
    AppState wired with a real SQLite key/value store, a light host and
    manually driven notification timers.
    """
    app = create_initial_state(
        settings=settings,
        kv=kv,
        host=FakeHost(dark=False),
        notifications=NotificationCenter(default_duration=2.0, timer_factory=timers),
    )
    app.load()
    return app
