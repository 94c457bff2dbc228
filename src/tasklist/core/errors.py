# src/tasklist/core/errors.py

from __future__ import annotations


class TaskListError(Exception):
    """Base class for errors raised by the task list core."""


class ValidationError(TaskListError, ValueError):
    """Rejected user input (e.g. blank task text). Caller should correct and retry."""


class StorageUnavailable(TaskListError, RuntimeError):
    """The underlying durable storage cannot be read or written."""


class TaskDecodeError(TaskListError, ValueError):
    """A stored blob is not a serialized task list."""


class RepositoryStateError(TaskListError, RuntimeError):
    """Repository lifecycle misuse (e.g. hydrate() called twice)."""
