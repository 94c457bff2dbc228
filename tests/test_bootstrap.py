# tests/test_bootstrap.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.cli.bootstrap import create_initial_state, create_store
from tasklist.config import Settings
from tasklist.storage.file_store import JsonFileBlobStore
from tasklist.storage.sqlite_store import SqliteBlobStore
from tasklist.tasks.task_models import SAMPLE_TASKS


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TASKLIST_APP_NAME",
        "TASKLIST_LOG_LEVEL",
        "TASKLIST_STORAGE_BACKEND",
        "TASKLIST_STORAGE_KEY",
        "TASKLIST_DATA_DIR",
        "TASKLIST_DB_PATH",
        "TASKLIST_JSON_DIR",
        "TASKLIST_SEED_SAMPLE_TASKS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "tasklist"
    assert s.storage_backend == "sqlite"
    assert s.storage_key == "tasks"
    assert s.data_dir == Path(".local/tasklist")
    assert s.tasks_db_path == Path(".local/tasklist") / "tasks.sqlite3"
    assert s.seed_sample_tasks is False


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKLIST_DB_PATH", raising=False)
    monkeypatch.delenv("TASKLIST_JSON_DIR", raising=False)
    monkeypatch.setenv("TASKLIST_STORAGE_BACKEND", " JSON ")
    monkeypatch.setenv("TASKLIST_STORAGE_KEY", "my_tasks")
    monkeypatch.setenv("TASKLIST_SEED_SAMPLE_TASKS", "yes")

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.storage_key == "my_tasks"
    assert s.tasks_json_dir == tmp_path / "store"
    assert s.seed_sample_tasks is True


def test_create_store_picks_backend(settings) -> None:
    assert isinstance(create_store(settings), SqliteBlobStore)

    settings.storage_backend = "json"
    assert isinstance(create_store(settings), JsonFileBlobStore)

    settings.storage_backend = "floppy"
    assert isinstance(create_store(settings), SqliteBlobStore)


@pytest.mark.asyncio
async def test_initial_state_hydrates_samples_on_first_run(settings) -> None:
    settings.seed_sample_tasks = True
    state = create_initial_state(settings=settings)

    assert settings.data_dir.is_dir()
    assert await state.repository.hydrate() == SAMPLE_TASKS

    # Samples are not written until the user changes something.
    assert await state.store.read("tasks") is None
    state.repository.toggle_task("1")
    await state.repository.drain()
    assert await state.store.read("tasks") is not None


@pytest.mark.asyncio
async def test_initial_state_uses_configured_key(settings) -> None:
    settings.storage_backend = "json"
    settings.storage_key = "inbox"
    state = create_initial_state(settings=settings)

    await state.repository.hydrate()
    state.repository.add_task("hello")
    await state.repository.drain()

    assert (settings.tasks_json_dir / "inbox.json").exists()
