# src/pocket_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a sensible default, so a first run needs no configuration.
- Storage keys are configurable but default to the historical names
  ("todos" / "darkMode") so existing data keeps loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "POCKET_TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_optional_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return _env_bool(name, False)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    kv_db_path: Path

    # ---- Storage keys ----
    tasks_key: str
    theme_key: str

    # ---- Behaviour ----
    notification_seconds: float
    title_max_length: int
    prefer_dark: Optional[bool]

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "TODO App")
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket_todo"))
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "storage.sqlite3")

        tasks_key = _env(_k("TASKS_KEY"), "todos")
        theme_key = _env(_k("THEME_KEY"), "darkMode")

        # Negative durations make no sense for a dismissal timer.
        notification_seconds = max(0.0, _env_float(_k("NOTIFICATION_SECONDS"), 2.0))
        title_max_length = max(1, _env_int(_k("TITLE_MAX_LENGTH"), 100))
        prefer_dark = _env_optional_bool(_k("PREFER_DARK"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            kv_db_path=kv_db_path,
            tasks_key=tasks_key,
            theme_key=theme_key,
            notification_seconds=notification_seconds,
            title_max_length=title_max_length,
            prefer_dark=prefer_dark,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
