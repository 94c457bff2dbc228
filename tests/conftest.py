# tests/conftest.py

from __future__ import annotations

import itertools
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.tasks.task_repository import TaskRepository

from .fakes import FakeBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        storage_backend="sqlite",
        storage_key="tasks",
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        tasks_json_dir=tmp_path / "data" / "store",
        seed_sample_tasks=False,
    )


@pytest.fixture()
def store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def repo(store: FakeBlobStore) -> TaskRepository:
    """Un-hydrated repository with predictable ids (t1, t2, ...)."""
    counter = itertools.count(1)
    return TaskRepository(store, id_factory=lambda: f"t{next(counter)}")


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeBlobStore, repo: TaskRepository) -> AppState:
    """AppState wired with the in-memory store (not hydrated yet)."""
    return AppState(settings=settings, store=store, repository=repo)
