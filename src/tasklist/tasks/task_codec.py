# src/tasklist/tasks/task_codec.py

"""
Text encoding of the task collection.

Format: a JSON array of {"id", "text", "timestamp", "completed"} records,
most-recent-first. The whole collection is always encoded (never a delta).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..core.errors import TaskDecodeError
from .task_models import Task

logger = logging.getLogger(__name__)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "timestamp": task.timestamp,
        "completed": task.completed,
    }


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "yes", "y", "on"}
    if isinstance(raw, (int, float)):
        return raw != 0
    return False


def task_from_dict(raw: Any) -> Task | None:
    """Build a Task from a decoded record, or None if the record is unusable."""
    if not isinstance(raw, dict):
        return None

    task_id = raw.get("id")
    if task_id is None or str(task_id).strip() == "":
        return None

    text = raw.get("text")
    if not isinstance(text, str) or not text.strip():
        return None

    timestamp = raw.get("timestamp")
    return Task(
        id=str(task_id),
        text=text,
        timestamp=timestamp if isinstance(timestamp, str) else "",
        completed=_as_bool(raw.get("completed", False)),
    )


def decode_tasks(blob: str) -> list[Task]:
    """
    Decode a stored blob back into an ordered task list.

    Raises TaskDecodeError if the blob is not JSON or not an array.
    Individual bad records (non-objects, missing id, blank text, duplicate id)
    are skipped so one damaged entry does not cost the whole list.
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as e:
        raise TaskDecodeError(f"stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"stored tasks must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for i, raw in enumerate(data):
        task = task_from_dict(raw)
        if task is None:
            logger.warning("Skipping malformed task record at index %d", i)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task id=%s at index %d", task.id, i)
            continue
        seen.add(task.id)
        out.append(task)

    return out
