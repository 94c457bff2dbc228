# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

JUST_NOW = "just now"
EDITED_JUST_NOW = "edited just now"


class RepoStatus(StrEnum):
    """
    Repository lifecycle.

    idle -> loading (hydrate in flight) -> ready
    Mutations are only accepted in "ready".
    """

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    timestamp: str = JUST_NOW
    completed: bool = False


@dataclass(frozen=True, slots=True)
class RepoState:
    """Read-only view of the repository handed to listeners."""

    tasks: tuple[Task, ...]
    loading: bool
    last_error: str | None


# Demo content shown on a fresh install when seeding is enabled.
SAMPLE_TASKS: tuple[Task, ...] = (
    Task(id="1", text="Layout about page", timestamp="about 1 hour ago"),
    Task(id="2", text="Color", timestamp="1 day ago"),
    Task(id="3", text="typo graphys", timestamp="3 days ago"),
    Task(id="4", text="6 starter", timestamp="6 days ago"),
    Task(id="5", text="meditate", timestamp="2 weeks ago", completed=True),
    Task(id="6", text="meditate", timestamp="2 weeks ago", completed=True),
)
