# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from taskdeck.core.errors import PersistenceError
from taskdeck.core.events import DomainEvent


@dataclass(slots=True)
class RecordingSink:
    """
    EventSink that keeps every notification for assertions.
    """

    events: list[DomainEvent] = field(default_factory=list)

    def notify(self, event: DomainEvent) -> None:
        self.events.append(event)

    @property
    def last(self) -> DomainEvent:
        return self.events[-1]


class FailingBlobStore:
    """BlobStore whose storage medium is gone (quota, permissions, ...)."""

    def __init__(self) -> None:
        self.get_calls = 0
        self.put_calls = 0

    def get(self, key: str) -> str | None:
        self.get_calls += 1
        raise PersistenceError(f"read failed key={key}: disk unavailable")

    def put(self, key: str, text: str) -> None:
        self.put_calls += 1
        raise PersistenceError(f"write failed key={key}: quota exceeded")


class FakeClock:
    """Injected clock; tests move time explicitly."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class SequentialIds:
    """Deterministic id factory: t1, t2, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.counter = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"{self.prefix}{self.counter}"
