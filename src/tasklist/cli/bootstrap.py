# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend and wires it into a TaskRepository,
- hands both to the view through AppState (no global store).
"""

from __future__ import annotations

import logging

from ..config import STORAGE_BACKENDS, get_settings
from ..core.ports import BlobStore
from ..core.state import AppState
from ..storage.file_store import JsonFileBlobStore
from ..storage.sqlite_store import SqliteBlobStore
from ..tasks.task_models import SAMPLE_TASKS
from ..tasks.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_store(settings) -> BlobStore:
    backend = str(getattr(settings, "storage_backend", "sqlite")).strip().lower()
    if backend not in STORAGE_BACKENDS:
        logger.warning("Unknown storage backend %r; using sqlite.", backend)
        backend = "sqlite"

    if backend == "json":
        return JsonFileBlobStore(settings.tasks_json_dir)
    return SqliteBlobStore(settings.tasks_db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    The repository is not hydrated yet: that needs a running event loop.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = create_store(settings)
    seed = SAMPLE_TASKS if getattr(settings, "seed_sample_tasks", False) else ()
    repository = TaskRepository(
        store,
        storage_key=getattr(settings, "storage_key", "tasks"),
        initial_tasks=seed,
    )

    return AppState(settings=settings, store=store, repository=repository)
