# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.errors import ValidationError
from ..core.state import AppState
from ..tasks.task_api import count_completed, render_task_list, resolve_task_ref

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def add_from_text(state: AppState, text: str) -> str:
    """Shared by /add and plain (non-command) console lines."""
    try:
        task = state.repository.add_task(text)
    except ValidationError:
        return "Task text can't be empty."
    if task is None:
        return "Tasks are still loading, try again in a moment."
    return render_task_list(state.repository.snapshot())


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.repository.snapshot())


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /add <text>"
    return add_from_text(state, " ".join(args))


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <number|id>"
    task = resolve_task_ref(state.repository.snapshot(), args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    state.repository.toggle_task(task.id)
    return render_task_list(state.repository.snapshot())


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <ref> <new text>
    """
    if len(args) < 2:
        return "Usage: /edit <number|id> <new text>"
    task = resolve_task_ref(state.repository.snapshot(), args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    try:
        state.repository.edit_task(task.id, " ".join(args[1:]))
    except ValidationError:
        return "Task text can't be empty."
    return render_task_list(state.repository.snapshot())


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /del <ref>  -> asks for confirmation
    /yes        -> confirm
    /no         -> cancel
    """
    if not args:
        return "Usage: /del <number|id>"
    task = resolve_task_ref(state.repository.snapshot(), args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    state.pending_delete_id = task.id
    return f'Delete task "{task.text}"? Type /yes to delete or /no to keep it.'


def cmd_yes(state: AppState, args: list[str]) -> str:
    task_id = state.pending_delete_id
    if task_id is None:
        return "Nothing to confirm."
    state.pending_delete_id = None
    task = state.repository.get_task(task_id)
    if task is None or not state.repository.delete_task(task_id):
        return "That task is already gone."
    return f'Deleted "{task.text}".\n' + render_task_list(state.repository.snapshot())


def cmd_no(state: AppState, args: list[str]) -> str:
    if state.pending_delete_id is None:
        return "Nothing to cancel."
    state.pending_delete_id = None
    return "Kept it."


def cmd_status(state: AppState, args: list[str]) -> str:
    repo = state.repository
    tasks = repo.snapshot()
    backend = str(getattr(state.settings, "storage_backend", "sqlite"))
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({count_completed(tasks)} done)\n"
        f"  Storage: {backend} (key={repo.storage_key})\n"
        f"  Loading: {'yes' if repo.loading else 'no'}\n"
        f"  Pending writes: {repo.pending_writes}\n"
        f"  Last error: {repo.last_error or '-'}"
    )


def cmd_dismiss(state: AppState, args: list[str]) -> str:
    state.repository.clear_error()
    return "Error cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> (or just type the text).")
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle", "t"]
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <number|id> <new text>.")
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del <number|id>.", aliases=["rm"])
registry.register("yes", cmd_yes, help_text="Confirm a pending delete.", aliases=["y"])
registry.register("no", cmd_no, help_text="Cancel a pending delete.", aliases=["n"])
registry.register("status", cmd_status, help_text="Show counts, storage and last error.")
registry.register("dismiss", cmd_dismiss, help_text="Clear the last storage error.")
