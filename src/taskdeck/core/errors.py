# src/taskdeck/core/errors.py

from __future__ import annotations


class TaskdeckError(Exception):
    """Base class for all errors raised by taskdeck."""


class ValidationError(TaskdeckError):
    """
    A command was rejected. Always recoverable: the store turns it into an
    error event and leaves state untouched.
    """

    def __init__(self, title: str, description: str | None = None) -> None:
        super().__init__(f"{title}: {description}" if description else title)
        self.title = title
        self.description = description


class NotFoundError(ValidationError):
    """Unknown task/list/group/category/preset id."""


class PersistenceError(TaskdeckError):
    """Blob store read/write failure. Never surfaces past the persistence adapter."""
