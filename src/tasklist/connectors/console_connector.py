# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import add_from_text
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_api import render_task_list
from ..tasks.task_models import RepoState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one line of user input. Returns the text to show, or None for blank input.

    Slash commands go to the registry; anything else becomes a new task.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line, emit=_print_ts)
        if reply is None:
            reply = add_from_text(state, line)
    except Exception:
        logger.exception("Command handler crashed.")
        reply = "Internal error while handling a command."
    return reply


async def run_console_loop(state: AppState) -> None:
    repo = state.repository
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "tasklist"))
    logger.info("Console connector started (%s).", app_name)

    last_seen_error: list[str | None] = [repo.last_error]

    def on_change(st: RepoState) -> None:
        # Storage errors surface here; they never interrupt the input flow.
        if st.last_error and st.last_error != last_seen_error[0]:
            _print_ts(f"[STORAGE] {st.last_error}")
        last_seen_error[0] = st.last_error

    unsubscribe = repo.subscribe(on_change)

    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    if repo.last_error:
        _print_ts(f"[STORAGE] {repo.last_error}")
    print(render_task_list(repo.snapshot()), flush=True)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, "> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            reply = handle_line(state, user_input)
            if reply is not None:
                print(reply, flush=True)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
