# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import BlobStore, TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: BlobStore
    repository: TaskRepo

    # Transient view state: id of the task waiting for a /yes or /no.
    pending_delete_id: str | None = None
