# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The repository depends on Protocols instead of concrete implementations.
This keeps storage backends and views swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Awaitable, Protocol


class BlobStore(Protocol):
    """
    Durable key -> blob map.

    Every write is a full replacement of the value under `key`.
    Both calls raise StorageUnavailable when the device storage cannot be accessed.
    """

    def read(self, key: str) -> Awaitable[str | None]: ...

    def write(self, key: str, blob: str) -> Awaitable[None]: ...

    def close(self) -> None: ...


StateListener = Callable[[Any], None]
# Called with a RepoState after every change the view may want to re-render.


class TaskRepo(Protocol):
    """What the app and view layers are allowed to do with the task collection."""

    @property
    def loading(self) -> bool: ...

    @property
    def last_error(self) -> str | None: ...

    @property
    def storage_key(self) -> str: ...

    @property
    def pending_writes(self) -> int: ...

    async def hydrate(self) -> tuple[Any, ...]: ...
    async def drain(self) -> None: ...

    def snapshot(self) -> tuple[Any, ...]: ...
    def get_task(self, task_id: str) -> Any | None: ...
    def state(self) -> Any: ...
    def subscribe(self, listener: StateListener) -> Callable[[], None]: ...
    def clear_error(self) -> None: ...

    def add_task(self, text: str) -> Any | None: ...
    def toggle_task(self, task_id: str) -> bool: ...
    def edit_task(self, task_id: str, text: str) -> bool: ...
    def delete_task(self, task_id: str) -> bool: ...
