# src/pocket_todo/core/theme.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..storage.kv_store import StorageError
from .ports import HostEnvironment, KeyValueRepo, Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Palette:
    primary: str
    danger: str
    warning: str
    success: str
    text: str
    muted: str


LIGHT = Palette(
    primary="#4a6bff",
    danger="#ff4a4a",
    warning="#ffb74a",
    success="#4aff7d",
    text="#2d3748",
    muted="#888888",
)

DARK = Palette(
    primary="#5d7aff",
    danger="#ff6b6b",
    warning="#ffc46b",
    success="#6bff96",
    text="#f8f9fa",
    muted="#888888",
)


class ThemePreference:
    """
    Light/dark flag persisted as "true"/"false" under a fixed key.

    When nothing has ever been stored, the host's preference decides.
    """

    def __init__(
        self,
        kv: KeyValueRepo,
        host: HostEnvironment,
        notifier: Notifier,
        *,
        key: str = "darkMode",
    ) -> None:
        self._kv = kv
        self._host = host
        self._notifier = notifier
        self._key = key
        self.dark = False

    @property
    def palette(self) -> Palette:
        return DARK if self.dark else LIGHT

    @property
    def name(self) -> str:
        return "dark" if self.dark else "light"

    def load(self) -> bool:
        try:
            stored = self._kv.get(self._key)
        except StorageError:
            logger.exception("Failed to read theme preference key=%s", self._key)
            self._notifier.show("Failed to load tasks and theme.", "error")
            stored = None

        if stored in ("true", "false"):
            self.dark = stored == "true"
        else:
            if stored is not None:
                logger.warning("Ignoring unexpected theme value %r", stored)
            self.dark = self._host.prefers_dark()

        logger.info("Theme loaded: %s (stored=%r)", self.name, stored)
        return self.dark

    def toggle(self) -> bool:
        # The in-memory flip stands even if the write fails.
        self.dark = not self.dark
        try:
            self._kv.set(self._key, "true" if self.dark else "false")
        except StorageError:
            logger.exception("Failed to save theme preference key=%s", self._key)
            self._notifier.show("Failed to save theme preference.", "error")
        return self.dark
