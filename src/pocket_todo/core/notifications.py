# src/pocket_todo/core/notifications.py

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from .ports import Cancellable

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Cancellable]


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def parse(cls, raw: str | None) -> NotificationKind:
        if not raw:
            return cls.SUCCESS
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.INFO


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    kind: NotificationKind
    seq: int


def thread_timer(delay: float, callback: Callable[[], None]) -> Cancellable:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class NotificationCenter:
    """
    Single-slot transient notification.

    - show() replaces whatever is displayed and restarts the dismissal timer
    - a timer that fires after a newer show() leaves the newer message alone
    - dismiss() clears immediately

    The timer runs on its own thread, so the slot is guarded by a lock.
    """

    def __init__(
        self,
        *,
        default_duration: float = 2.0,
        timer_factory: TimerFactory = thread_timer,
    ) -> None:
        self._default_duration = float(default_duration)
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._seq = itertools.count(1)
        self._current: Notification | None = None
        self._timer: Cancellable | None = None

    @property
    def current(self) -> Notification | None:
        with self._lock:
            return self._current

    def show(self, message: str, kind: str = "success", duration: float | None = None) -> None:
        delay = self._default_duration if duration is None else float(duration)
        note = Notification(message=message, kind=NotificationKind.parse(kind), seq=next(self._seq))

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._current = note
            self._timer = self._timer_factory(delay, lambda: self._expire(note.seq))
            self._timer.start()

        logger.debug("Notification #%s (%s): %s", note.seq, note.kind, message)

    def dismiss(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._current = None

    def close(self) -> None:
        """Cancel any pending timer (shutdown hook)."""
        self.dismiss()

    def _expire(self, seq: int) -> None:
        with self._lock:
            if self._current is None or self._current.seq != seq:
                return
            self._current = None
            self._timer = None
