# tests/test_console_loop.py

from __future__ import annotations

import pytest

from tasklist.cli.main import run
from tasklist.core.state import AppState
from tasklist.tasks.task_codec import decode_tasks

from .fakes import FakeBlobStore


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.mark.asyncio
async def test_session_hydrates_runs_commands_and_flushes(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], state: AppState, store: FakeBlobStore
) -> None:
    _feed(monkeypatch, ["Buy milk", "/done 1", "/exit", "never read"])

    await run(state)

    out = capsys.readouterr().out
    assert "No tasks yet" in out
    assert "1. [x] Buy milk" in out

    assert [(t.text, t.completed) for t in decode_tasks(store.data["tasks"])] == [("Buy milk", True)]
    assert store.closed is True


@pytest.mark.asyncio
async def test_session_ends_on_eof_and_reports_storage_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], state: AppState, store: FakeBlobStore
) -> None:
    store.fail_reads = True
    _feed(monkeypatch, ["still usable"])

    await run(state)

    out = capsys.readouterr().out
    assert "[STORAGE] Could not load tasks" in out
    assert state.repository.snapshot()[0].text == "still usable"
    assert store.closed is True
