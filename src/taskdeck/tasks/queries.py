# src/taskdeck/tasks/queries.py

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ..core.dates import is_this_week, is_today, is_tomorrow, start_of_day
from ..core.models import (
    ALL_LIST_ID,
    BUILT_IN_TIME_PRESETS,
    AppState,
    Category,
    ListGroup,
    Task,
    TaskList,
    TimePreset,
    ViewType,
)

TaskPredicate = Callable[[Task], bool]


class DueFilter(StrEnum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    OVERDUE = "overdue"


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """
    Base filter shared by every view.

    Unset fields (None / empty) do not constrain the result.
    """

    list_id: str | None = None
    completed: bool | None = None
    important: bool | None = None
    search: str | None = None
    category_ids: tuple[str, ...] = ()
    due: DueFilter | None = None


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Globally pinned first, then list-pinned, then ascending `order` (stable)."""
    return sorted(tasks, key=lambda t: (not t.pinned_globally, not t.pinned, t.order))


def matches_search(task: Task, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    if q in task.title.lower():
        return True
    return bool(task.notes) and q in task.notes.lower()  # type: ignore[union-attr]


def _matches_due(task: Task, due: DueFilter, now: datetime, week_starts_on: int) -> bool:
    if task.due_date is None:
        return False
    if due == DueFilter.TODAY:
        return is_today(task.due_date, now)
    if due == DueFilter.TOMORROW:
        return is_tomorrow(task.due_date, now)
    if due == DueFilter.WEEK:
        return is_this_week(task.due_date, now, week_starts_on)
    return start_of_day(task.due_date) < start_of_day(now)


def matches_filter(
    task: Task,
    flt: TaskFilter,
    *,
    now: datetime,
    week_starts_on: int = 0,
) -> bool:
    if flt.list_id and task.list_id != flt.list_id:
        return False
    if flt.completed is not None and task.completed != flt.completed:
        return False
    if flt.important and not task.important:
        return False
    if flt.search and not matches_search(task, flt.search):
        return False
    if flt.category_ids and not any(c in task.category_ids for c in flt.category_ids):
        return False
    if flt.due is not None and not _matches_due(task, flt.due, now, week_starts_on):
        return False
    return True


def filter_tasks(
    state: AppState,
    flt: TaskFilter | None = None,
    *,
    now: datetime,
    week_starts_on: int = 0,
) -> list[Task]:
    flt = flt or TaskFilter()
    return sort_tasks(
        t for t in state.tasks if matches_filter(t, flt, now=now, week_starts_on=week_starts_on)
    )


def is_in_my_day(task: Task, now: datetime) -> bool:
    return not task.completed and (
        task.my_day or (task.due_date is not None and is_today(task.due_date, now))
    )


def view_predicate(
    view: ViewType,
    *,
    now: datetime,
    list_id: str | None = None,
    category_id: str | None = None,
) -> TaskPredicate:
    """Membership test for a named view (before search and sorting)."""
    if view == ViewType.MY_DAY:
        return lambda t: is_in_my_day(t, now)
    if view == ViewType.IMPORTANT:
        return lambda t: t.important and not t.completed
    if view == ViewType.PLANNED:
        return lambda t: t.due_date is not None
    if view == ViewType.COMPLETED:
        return lambda t: t.completed
    if view == ViewType.CATEGORY:
        if not category_id:
            return lambda t: False
        return lambda t: not t.completed and category_id in t.category_ids
    if view == ViewType.LIST:
        if not list_id:
            return lambda t: False
        return lambda t: t.list_id == list_id
    return lambda t: not t.completed


def tasks_for_view(
    state: AppState,
    view: ViewType,
    *,
    now: datetime,
    list_id: str | None = None,
    category_id: str | None = None,
    search: str | None = None,
    include_completed_planned: bool = False,
) -> list[Task]:
    """
    Ordered tasks shown by `view`.

    The planned predicate keeps completed tasks; this caller drops them unless
    include_completed_planned is set.
    """
    pred = view_predicate(view, now=now, list_id=list_id, category_id=category_id)
    out = [t for t in state.tasks if pred(t)]
    if view == ViewType.PLANNED and not include_completed_planned:
        out = [t for t in out if not t.completed]
    if search:
        out = [t for t in out if matches_search(t, search)]
    return sort_tasks(out)


def tasks_for_current_view(state: AppState, *, now: datetime) -> list[Task]:
    return tasks_for_view(
        state,
        state.current_view,
        now=now,
        list_id=state.current_list_id,
        category_id=state.current_category_id,
        search=state.search_query or None,
    )


# ---- counts ----


def task_count_for_list(state: AppState, list_id: str, *, now: datetime) -> int:
    """Badge count: incomplete tasks, with the system ids mapped to their views."""
    tasks = state.tasks
    if list_id == ViewType.COMPLETED:
        return sum(1 for t in tasks if t.completed)
    if list_id == ViewType.IMPORTANT:
        return sum(1 for t in tasks if t.important and not t.completed)
    if list_id == ViewType.PLANNED:
        return sum(1 for t in tasks if t.due_date is not None and not t.completed)
    if list_id == ViewType.MY_DAY:
        return sum(1 for t in tasks if is_in_my_day(t, now))
    if list_id == ALL_LIST_ID:
        return sum(1 for t in tasks if not t.completed)
    return sum(1 for t in tasks if t.list_id == list_id and not t.completed)


def task_count_for_category(state: AppState, category_id: str) -> int:
    return sum(1 for t in state.tasks if not t.completed and category_id in t.category_ids)


# ---- lists / groups / categories ----


def lists_in_group(state: AppState, group_id: str | None) -> list[TaskList]:
    """User lists whose group is `group_id` (None = ungrouped), by order."""
    return sorted(
        (lst for lst in state.lists if not lst.is_system and lst.group_id == group_id),
        key=lambda lst: lst.order,
    )


def grouped_lists(state: AppState) -> list[tuple[ListGroup, list[TaskList]]]:
    groups = sorted(state.list_groups, key=lambda g: g.order)
    return [(g, lists_in_group(state, g.id)) for g in groups]


def group_for_list(state: AppState, list_id: str) -> ListGroup | None:
    lst = state.find_list(list_id)
    if lst is None or lst.group_id is None:
        return None
    return state.find_group(lst.group_id)


def list_icon(state: AppState, list_id: str) -> str | None:
    """Emoji to display for a list, honouring the group's icon override."""
    lst = state.find_list(list_id)
    if lst is None:
        return None
    group = group_for_list(state, list_id)
    if group is not None and group.override_list_icons and group.emoji:
        return group.emoji
    return lst.emoji


def categories_for_task(state: AppState, task_id: str) -> list[Category]:
    """Categories a task belongs to; dangling ids are skipped."""
    task = state.find_task(task_id)
    if task is None:
        return []
    by_id = {c.id: c for c in state.categories}
    return [by_id[cid] for cid in task.category_ids if cid in by_id]


def time_presets(state: AppState) -> list[TimePreset]:
    """Enabled built-in presets followed by custom ones."""
    disabled = set(state.disabled_built_in_presets)
    out = [p for p in BUILT_IN_TIME_PRESETS if p.id not in disabled]
    out.extend(state.custom_time_presets)
    return out
