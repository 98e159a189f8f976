# src/pocket_todo/core/confirmation.py

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ConfirmationGate:
    """
    Two-step guard for a destructive action.

    The action runs only while the dialog is open AND its checkbox is ticked.
    Opening or dismissing the dialog always unticks the checkbox, so an earlier
    acknowledgement never carries over.
    """

    def __init__(self, name: str = "clear-all") -> None:
        self.name = name
        self._open = False
        self._acknowledged = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged

    def open(self) -> None:
        self._open = True
        self._acknowledged = False

    def toggle(self) -> bool:
        """Flip the checkbox. Has no effect while the dialog is closed."""
        if not self._open:
            return False
        self._acknowledged = not self._acknowledged
        return self._acknowledged

    def dismiss(self) -> None:
        self._open = False
        self._acknowledged = False

    def confirm(self, action: Callable[[], object]) -> bool:
        if not (self._open and self._acknowledged):
            logger.debug("Gate %s refused (open=%s ack=%s)", self.name, self._open, self._acknowledged)
            return False
        self.dismiss()
        action()
        return True
