# src/pocket_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from .confirmation import ConfirmationGate
from .notifications import NotificationCenter
from .theme import ThemePreference


@dataclass
class AppState:
    """
    Everything the UI is allowed to touch.

    Connectors read from here and mutate only through the store, theme and
    gate methods; they keep no copy of the task list themselves.
    """

    # Settings object (config.Settings or a test double).
    settings: object

    store: TaskStore
    theme: ThemePreference
    notifications: NotificationCenter
    clear_gate: ConfirmationGate

    def load(self) -> None:
        """Startup: restore theme and tasks. Never raises for bad stored data."""
        self.theme.load()
        self.store.load()

    def request_clear_all(self) -> None:
        self.clear_gate.open()

    def confirm_clear_all(self) -> bool:
        return self.clear_gate.confirm(self.store.clear_all)
