# src/tasklist/storage/file_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
import threading
from pathlib import Path

from ..core.errors import StorageUnavailable, TaskDecodeError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileBlobStore:
    """
    Directory-backed key -> blob store: one `<key>.json` file per key.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write never leaves a half-written blob behind.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._write_lock = threading.Lock()
        logger.info("JsonFileBlobStore configured dir=%s", self._dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def close(self) -> None:
        return

    def path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key in (".", ".."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            if not path.exists():
                logger.debug("Read key=%s: absent", key)
                return None
            blob = path.read_text("utf-8")
        except UnicodeDecodeError as e:
            raise TaskDecodeError(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageUnavailable(f"cannot read {path}: {e}") from e
        logger.debug("Read key=%s bytes=%d", key, len(blob))
        return blob

    def put(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        with self._write_lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                tmp.write_text(blob, "utf-8")
                os.replace(tmp, path)
            except OSError as e:
                with contextlib.suppress(OSError):
                    tmp.unlink(missing_ok=True)
                raise StorageUnavailable(f"cannot write {path}: {e}") from e
            with contextlib.suppress(OSError):
                # Best-effort: keep the task list private on disk.
                os.chmod(path, 0o600)
        logger.debug("Wrote key=%s bytes=%d", key, len(blob))

    async def read(self, key: str) -> str | None:
        return await asyncio.to_thread(self.get, key)

    async def write(self, key: str, blob: str) -> None:
        await asyncio.to_thread(self.put, key, blob)
