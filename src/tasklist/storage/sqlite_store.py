# src/tasklist/storage/sqlite_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import threading
import time
from pathlib import Path

from ..core.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class SqliteBlobStore:
    """
    SQLite key -> blob store.

    One table, one row per key. Every write replaces the row.

    Thread-safety:
    - each method opens its own SQLite connection
    - writes are serialized by a lock, so for a given key the last write
      to *finish* is the one that sticks
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._write_lock = threading.Lock()
        self._schema_ready = False
        logger.info("SqliteBlobStore configured db=%s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        if self._schema_ready:
            return
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
        self._schema_ready = True

    # ---- blocking API ----

    def get(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                self._ensure_schema(conn)
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"cannot read {key!r} from {self._db_path}: {e}") from e

        if row is None:
            logger.debug("Read key=%s: absent", key)
            return None
        logger.debug("Read key=%s bytes=%d", key, len(row[0]))
        return str(row[0])

    def put(self, key: str, blob: str) -> None:
        with self._write_lock:
            try:
                conn = self._get_conn()
                try:
                    self._ensure_schema(conn)
                    conn.execute(
                        """
                        INSERT INTO kv(key, value, updated_at)
                        VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                        """,
                        (key, blob, time.time()),
                    )
                    conn.commit()
                finally:
                    conn.close()
            except (sqlite3.Error, OSError) as e:
                raise StorageUnavailable(f"cannot write {key!r} to {self._db_path}: {e}") from e
        logger.debug("Wrote key=%s bytes=%d", key, len(blob))

    # ---- async API (BlobStore port) ----

    async def read(self, key: str) -> str | None:
        return await asyncio.to_thread(self.get, key)

    async def write(self, key: str, blob: str) -> None:
        await asyncio.to_thread(self.put, key, blob)
