# src/pocket_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and the host environment swappable and makes testing easier.
"""

from typing import Protocol


class KeyValueRepo(Protocol):
    """
    Whole-value string storage. A missing key reads as None.

    Backend failures are raised as storage.kv_store.StorageError.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class HostEnvironment(Protocol):
    """Answers questions about the machine the app runs on."""

    def prefers_dark(self) -> bool: ...


class Notifier(Protocol):
    """Where the store and theme report outcomes for the user to see."""

    def show(self, message: str, kind: str = "success", duration: float | None = None) -> None: ...


class Cancellable(Protocol):
    def start(self) -> None: ...
    def cancel(self) -> None: ...
