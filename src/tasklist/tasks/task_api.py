# src/tasklist/tasks/task_api.py

from __future__ import annotations

from collections.abc import Sequence

from .task_models import Task


def resolve_task_ref(tasks: Sequence[Task], ref: str) -> Task | None:
    """
    Find a task by what a user typed.

    Accepted forms, tried in order:
    - 1-based position in the list as currently shown ("2")
    - exact id
    - unique id prefix (at least 4 chars)
    """
    ref = (ref or "").strip()
    if not ref:
        return None

    if ref.isdigit():
        pos = int(ref)
        if 1 <= pos <= len(tasks):
            return tasks[pos - 1]

    for t in tasks:
        if t.id == ref:
            return t

    if len(ref) >= 4:
        matches = [t for t in tasks if t.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]

    return None


def format_task_line(pos: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    stamp = f"  ({task.timestamp})" if task.timestamp else ""
    return f"{pos}. [{mark}] {task.text}{stamp}"


def render_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "Tasks\n  No tasks yet. Type a line (or /add <text>) to create one."
    lines = ["Tasks"]
    lines.extend("  " + format_task_line(i, t) for i, t in enumerate(tasks, start=1))
    return "\n".join(lines)


def count_completed(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.completed)
