# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires concrete implementations into AppState (storage/host/notifications).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.confirmation import ConfirmationGate
from ..core.host import TerminalHost
from ..core.notifications import NotificationCenter
from ..core.ports import HostEnvironment, KeyValueRepo
from ..core.state import AppState
from ..core.theme import ThemePreference
from ..storage.kv_store import KeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueRepo | None = None,
    host: HostEnvironment | None = None,
    notifications: NotificationCenter | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and collaborators injectable makes the app easier to test
    and avoids hidden global config reads. Nothing is loaded yet: call
    AppState.load() once the UI is ready to show notifications.
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        kv = KeyValueStore(settings.kv_db_path)
    if host is None:
        host = TerminalHost(override=getattr(settings, "prefer_dark", None))
    if notifications is None:
        notifications = NotificationCenter(default_duration=settings.notification_seconds)

    state = AppState(
        settings=settings,
        store=TaskStore(
            kv,
            notifications,
            key=settings.tasks_key,
            title_max_length=settings.title_max_length,
        ),
        theme=ThemePreference(kv, host, notifications, key=settings.theme_key),
        notifications=notifications,
        clear_gate=ConfirmationGate(),
    )
    logger.debug("AppState wired (kv=%s)", type(kv).__name__)
    return state
