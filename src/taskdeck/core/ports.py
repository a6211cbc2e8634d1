# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations,
so storage media and notification surfaces stay swappable in tests.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .events import DomainEvent

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


class BlobStore(Protocol):
    """Opaque key -> text storage. Implementations raise PersistenceError on failure."""

    def get(self, key: str) -> str | None: ...
    def put(self, key: str, text: str) -> None: ...


class EventSink(Protocol):
    """Notification collaborator (toasts, console output, ...)."""

    def notify(self, event: DomainEvent) -> None: ...
