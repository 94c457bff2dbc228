# src/tasklist/tasks/task_repository.py

from __future__ import annotations

"""
Task repository: the in-memory task list and its write-through to storage.

Every mutation is two-phase:
1. apply the change to the in-memory list (synchronous, immediate),
2. encode the *whole* list and schedule a background write under one key.

Callers never wait for phase 2. A failed write is logged and recorded in
`last_error`; the in-memory change is kept and the next successful write
brings storage back in line.

Writes are not sequenced: if two writes finish out of order, storage holds the
older snapshot until the next mutation writes again.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..core.errors import RepositoryStateError, StorageUnavailable, TaskDecodeError, ValidationError
from ..core.ports import BlobStore, StateListener
from .task_codec import decode_tasks, encode_tasks
from .task_models import EDITED_JUST_NOW, JUST_NOW, RepoState, RepoStatus, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


def _new_task_id() -> str:
    return uuid.uuid4().hex


def _clean_text(text: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError("task text must not be empty")
    return cleaned


class TaskRepository:
    """
    Owner of the ordered task collection (most recent first).

    Lifecycle: construct -> `await hydrate()` once -> mutate freely.
    Mutations before hydrate has finished are rejected (logged, no-op).
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_factory: Callable[[], str] = _new_task_id,
        initial_tasks: Iterable[Task] = (),
    ) -> None:
        self._store = store
        self._key = storage_key
        self._id_factory = id_factory
        self._initial_tasks = tuple(initial_tasks)

        self._tasks: list[Task] = []
        # Every id seen by this instance, so a deleted task's id is never handed out again.
        self._issued_ids: set[str] = set()
        self._status = RepoStatus.IDLE
        self._last_error: str | None = None

        self._listeners: list[StateListener] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._write_seq = 0
        # Sequence number of the write that recorded last_error (0 = not a write).
        self._error_seq = 0

    # ---- observable state ----

    @property
    def status(self) -> RepoStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is RepoStatus.LOADING

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def storage_key(self) -> str:
        return self._key

    def snapshot(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def state(self) -> RepoState:
        return RepoState(tasks=self.snapshot(), loading=self.loading, last_error=self._last_error)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        if self._last_error is None:
            return
        self._last_error = None
        self._error_seq = 0
        self._notify()

    def _notify(self) -> None:
        st = self.state()
        for listener in list(self._listeners):
            try:
                listener(st)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def _record_error(self, message: str, *, seq: int = 0) -> None:
        self._last_error = message
        self._error_seq = seq
        self._notify()

    # ---- startup ----

    async def hydrate(self) -> tuple[Task, ...]:
        """
        Replace in-memory state with whatever was last stored.

        - absent key        -> initial_tasks (empty unless seeding is configured)
        - read failure      -> empty list, error recorded
        - undecodable blob  -> empty list, error recorded
        """
        if self._status is not RepoStatus.IDLE:
            raise RepositoryStateError(f"hydrate() may only be called once (status={self._status})")

        self._status = RepoStatus.LOADING
        self._notify()

        tasks: list[Task] = []
        try:
            blob = await self._store.read(self._key)
            if blob is None:
                tasks = list(self._initial_tasks)
                logger.info("No stored tasks under key=%s; starting with %d", self._key, len(tasks))
            else:
                tasks = decode_tasks(blob)
                logger.info("Hydrated %d tasks from key=%s", len(tasks), self._key)
        except StorageUnavailable as e:
            logger.warning("Task storage unavailable, starting empty: %s", e)
            self._last_error = f"Could not load tasks: {e}"
        except TaskDecodeError as e:
            logger.warning("Stored tasks are unreadable, starting empty: %s", e)
            self._last_error = f"Could not load tasks: {e}"
        finally:
            self._tasks = tasks
            self._issued_ids.update(t.id for t in tasks)
            self._status = RepoStatus.READY
            self._notify()

        return self.snapshot()

    # ---- mutations ----

    def _accepting(self, op: str) -> bool:
        if self._status is RepoStatus.READY:
            return True
        logger.warning("Ignoring %s: repository is %s", op, self._status)
        return False

    def _fresh_id(self) -> str:
        while True:
            task_id = str(self._id_factory())
            if task_id and task_id not in self._issued_ids:
                self._issued_ids.add(task_id)
                return task_id
            logger.debug("Task id collision (%s); generating another", task_id)

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def add_task(self, text: str) -> Task | None:
        cleaned = _clean_text(text)
        if not self._accepting("add_task"):
            return None

        task = Task(id=self._fresh_id(), text=cleaned, timestamp=JUST_NOW, completed=False)
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s", task.id)
        self._changed()
        return task

    def toggle_task(self, task_id: str) -> bool:
        if not self._accepting("toggle_task"):
            return False
        i = self._index_of(task_id)
        if i < 0:
            return False

        old = self._tasks[i]
        self._tasks[i] = replace(old, completed=not old.completed)
        logger.debug("Task toggled id=%s completed=%s", task_id, not old.completed)
        self._changed()
        return True

    def edit_task(self, task_id: str, text: str) -> bool:
        cleaned = _clean_text(text)
        if not self._accepting("edit_task"):
            return False
        i = self._index_of(task_id)
        if i < 0:
            return False

        self._tasks[i] = replace(self._tasks[i], text=cleaned, timestamp=EDITED_JUST_NOW)
        logger.debug("Task edited id=%s", task_id)
        self._changed()
        return True

    def delete_task(self, task_id: str) -> bool:
        if not self._accepting("delete_task"):
            return False
        i = self._index_of(task_id)
        if i < 0:
            return False

        del self._tasks[i]
        logger.debug("Task deleted id=%s", task_id)
        self._changed()
        return True

    # ---- write-through ----

    def _changed(self) -> None:
        self._schedule_write()
        self._notify()

    def _schedule_write(self) -> None:
        # Encode now so the write carries the state as of this mutation.
        blob = encode_tasks(self._tasks)
        self._write_seq += 1
        seq = self._write_seq

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller without an event loop: finish the write before returning.
            asyncio.run(self._write_through(seq, blob))
            return

        task = loop.create_task(self._write_through(seq, blob), name=f"tasklist-write-{seq}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write_through(self, seq: int, blob: str) -> None:
        try:
            await self._store.write(self._key, blob)
        except StorageUnavailable as e:
            logger.warning("Write #%d of key=%s failed: %s", seq, self._key, e)
            self._record_error(f"Could not save tasks: {e}", seq=seq)
            return
        except Exception as e:
            logger.exception("Write #%d of key=%s crashed", seq, self._key)
            self._record_error(f"Could not save tasks: {e}", seq=seq)
            return

        logger.debug("Write #%d of key=%s done", seq, self._key)
        # A newer snapshot landed: storage caught up with whatever failed before it.
        if self._last_error is not None and seq > self._error_seq:
            self.clear_error()

    @property
    def pending_writes(self) -> int:
        return sum(1 for t in self._pending if not t.done())

    async def drain(self) -> None:
        """Wait until every scheduled write has finished (successfully or not)."""
        while True:
            pending = [t for t in self._pending if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
