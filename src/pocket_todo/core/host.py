# src/pocket_todo/core/host.py

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)

# COLORFGBG background indexes that are dark in the standard 16-color palette.
_DARK_BACKGROUNDS = {0, 1, 2, 3, 4, 5, 6, 8}


class TerminalHost:
    """
    Host environment backed by the process environment.

    prefers_dark() order:
    - explicit override (settings / POCKET_TODO_PREFER_DARK)
    - COLORFGBG ("fg;bg" or "fg;x;bg"), as exported by rxvt, konsole, iTerm2...
    - light
    """

    def __init__(self, *, override: bool | None = None, environ: Mapping[str, str] | None = None) -> None:
        self._override = override
        self._environ = os.environ if environ is None else environ

    def prefers_dark(self) -> bool:
        if self._override is not None:
            return self._override

        raw = (self._environ.get("COLORFGBG") or "").strip()
        if not raw:
            return False
        try:
            bg = int(raw.split(";")[-1])
        except ValueError:
            logger.debug("Unparseable COLORFGBG=%r, assuming light.", raw)
            return False
        return bg in _DARK_BACKGROUNDS
