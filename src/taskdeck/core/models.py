# src/taskdeck/core/models.py

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

TITLE_MAX_LENGTH = 200

ALL_LIST_ID = "all"
SYSTEM_LIST_IDS: tuple[str, ...] = ("my-day", "important", "planned", ALL_LIST_ID)


class RepeatKind(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_raw(cls, raw: str | None) -> RepeatKind:
        if not raw:
            return cls.NONE
        try:
            return cls(raw)
        except ValueError:
            return cls.NONE


class ViewType(StrEnum):
    MY_DAY = "my-day"
    IMPORTANT = "important"
    PLANNED = "planned"
    ALL = "all"
    COMPLETED = "completed"
    LIST = "list"
    CATEGORY = "category"

    @classmethod
    def from_raw(cls, raw: str | None) -> ViewType:
        if not raw:
            return cls.MY_DAY
        try:
            return cls(raw)
        except ValueError:
            return cls.MY_DAY


@dataclass(frozen=True, slots=True)
class SubTask:
    id: str
    title: str
    created_at: datetime
    completed: bool = False


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - `order` is the position inside the owning list (`list_id`); pin flags never change it.
    - `repeat_days` holds weekday indices with 0=Sunday .. 6=Saturday and is only
      consulted when `repeat` is daily.
    - `category_ids` is advisory membership; unknown ids are filtered by readers.
    """

    id: str
    title: str
    list_id: str
    created_at: datetime
    updated_at: datetime

    completed: bool = False
    important: bool = False
    my_day: bool = False
    pinned: bool = False
    pinned_globally: bool = False

    due_date: datetime | None = None
    reminder: datetime | None = None
    notes: str | None = None

    repeat: RepeatKind = RepeatKind.NONE
    repeat_days: tuple[int, ...] = ()

    order: int = 0
    category_ids: tuple[str, ...] = ()
    steps: tuple[SubTask, ...] = ()


@dataclass(frozen=True, slots=True)
class TaskList:
    id: str
    name: str
    is_system: bool = False
    emoji: str | None = None
    color: str | None = None
    group_id: str | None = None
    order: int = 0
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ListGroup:
    id: str
    name: str
    emoji: str | None = None
    color: str | None = None
    collapsed: bool = False
    order: int = 0
    # Member lists show the group's emoji instead of their own.
    override_list_icons: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    color: str | None = None
    emoji: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class TimePreset:
    id: str
    label: str
    hour: int
    minute: int
    is_custom: bool = True
    created_at: datetime | None = None


BUILT_IN_TIME_PRESETS: tuple[TimePreset, ...] = (
    TimePreset(id="morning", label="Morning", hour=9, minute=0, is_custom=False),
    TimePreset(id="lunch", label="Lunch", hour=12, minute=0, is_custom=False),
    TimePreset(id="afternoon", label="Afternoon", hour=15, minute=0, is_custom=False),
    TimePreset(id="evening", label="Evening", hour=18, minute=0, is_custom=False),
    TimePreset(id="night", label="Night", hour=21, minute=0, is_custom=False),
)
BUILT_IN_PRESET_IDS = frozenset(p.id for p in BUILT_IN_TIME_PRESETS)


def default_system_lists(now: datetime | None = None) -> tuple[TaskList, ...]:
    created = now or datetime.now()
    names = {
        "my-day": "My Day",
        "important": "Important",
        "planned": "Planned",
        ALL_LIST_ID: "Tasks",
    }
    return tuple(
        TaskList(id=list_id, name=names[list_id], is_system=True, order=i, created_at=created)
        for i, list_id in enumerate(SYSTEM_LIST_IDS)
    )


@dataclass(frozen=True, slots=True)
class AppState:
    """Aggregate root. Replaced as a whole by every store command."""

    tasks: tuple[Task, ...] = ()
    lists: tuple[TaskList, ...] = ()
    list_groups: tuple[ListGroup, ...] = ()
    categories: tuple[Category, ...] = ()

    current_view: ViewType = ViewType.MY_DAY
    current_list_id: str | None = None
    current_category_id: str | None = None
    search_query: str = ""

    dark_mode: bool = False
    sidebar_collapsed: bool = False

    custom_time_presets: tuple[TimePreset, ...] = ()
    disabled_built_in_presets: tuple[str, ...] = ()

    # ---- lookups ----

    def find_task(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_list(self, list_id: str) -> TaskList | None:
        return next((lst for lst in self.lists if lst.id == list_id), None)

    def find_group(self, group_id: str) -> ListGroup | None:
        return next((g for g in self.list_groups if g.id == group_id), None)

    def find_category(self, category_id: str) -> Category | None:
        return next((c for c in self.categories if c.id == category_id), None)


def initial_state(now: datetime | None = None) -> AppState:
    return AppState(lists=default_system_lists(now))


_B36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n <= 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_B36[rem])
    return "".join(reversed(out))


def generate_id() -> str:
    """Millisecond timestamp plus a random suffix (unique enough for a single client)."""
    return _base36(int(time.time() * 1000)) + secrets.token_hex(5)
