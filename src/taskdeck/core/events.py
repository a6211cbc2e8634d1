# src/taskdeck/core/events.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .models import AppState


class EventKind(StrEnum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """User-facing outcome of a command (rendered as a toast by the UI)."""

    kind: EventKind
    title: str
    description: str | None = None

    @classmethod
    def success(cls, title: str, description: str | None = None) -> DomainEvent:
        return cls(EventKind.SUCCESS, title, description)

    @classmethod
    def info(cls, title: str, description: str | None = None) -> DomainEvent:
        return cls(EventKind.INFO, title, description)

    @classmethod
    def warning(cls, title: str, description: str | None = None) -> DomainEvent:
        return cls(EventKind.WARNING, title, description)

    @classmethod
    def error(cls, title: str, description: str | None = None) -> DomainEvent:
        return cls(EventKind.ERROR, title, description)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    What a pure command produced.

    - changed=False means the input state is returned untouched and nothing is persisted.
    - persist=False marks transient changes (e.g. the search query).
    """

    state: AppState
    events: tuple[DomainEvent, ...] = ()
    changed: bool = True
    persist: bool = True

    @classmethod
    def unchanged(cls, state: AppState, *events: DomainEvent) -> CommandResult:
        return cls(state=state, events=tuple(events), changed=False, persist=False)
