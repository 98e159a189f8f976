# src/pocket_todo/storage/kv_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the key/value backend cannot be read or written."""


class KeyValueStore:
    """
    SQLite key/value store.

    Values are whole strings: a write replaces the previous value, there is no
    partial update. A missing key reads as None.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "storage.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._ready = False
        try:
            self._ensure_schema()
            logger.info("KeyValueStore ready db=%s", self._db_path)
        except StorageError:
            # Reads and writes will retry and report; the app keeps running in memory.
            logger.exception("KeyValueStore unavailable db=%s", self._db_path)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        if self._ready:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._get_conn()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"cannot open key/value store at {self._db_path}") from e
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
            self._ready = True
        except sqlite3.Error as e:
            raise StorageError(f"cannot create schema in {self._db_path}") from e
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        self._ensure_schema()
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read key {key!r}") from e
        return None if row is None else str(row["value"])

    def set(self, key: str, value: str) -> None:
        self._ensure_schema()
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to write key {key!r}") from e
        logger.debug("kv set key=%s bytes=%d", key, len(value))
