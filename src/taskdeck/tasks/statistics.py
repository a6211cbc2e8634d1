# src/taskdeck/tasks/statistics.py

"""
Read-only task statistics.

Basic counts are taken over the task subset a view shows; date and
productivity metrics always use the whole collection so that e.g.
"completed today" covers every list. Trends compare the current value with
the same metric over the previous calendar week.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from ..core.dates import end_of_week, is_this_week, is_today, start_of_day, start_of_week
from ..core.models import Task, ViewType

TREND_STABLE_PERCENT = 5
TRAILING_DAYS = 7


def _round_half_up(value: float, ndigits: int = 0) -> float:
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


# ---- predicates ----


def is_due_today(task: Task, now: datetime) -> bool:
    return task.due_date is not None and is_today(task.due_date, now) and not task.completed


def is_overdue(task: Task, now: datetime) -> bool:
    return (
        task.due_date is not None
        and task.due_date.date() < now.date()
        and not task.completed
    )


def is_planned(task: Task) -> bool:
    return task.due_date is not None or task.reminder is not None


def completed_today(task: Task, now: datetime) -> bool:
    return task.completed and is_today(task.updated_at, now)


def completed_this_week(task: Task, now: datetime, week_starts_on: int = 0) -> bool:
    return task.completed and is_this_week(task.updated_at, now, week_starts_on)


# ---- metric bundles ----


@dataclass(frozen=True, slots=True)
class BasicMetrics:
    total: int
    completed: int
    incomplete: int
    important: int
    planned: int


@dataclass(frozen=True, slots=True)
class DateMetrics:
    due_today: int
    overdue: int
    completed_today: int
    completed_this_week: int


@dataclass(frozen=True, slots=True)
class ProductivityMetrics:
    average_completion_time: float
    task_creation_rate: float
    productivity_streak: int
    daily_completion_average: float


def calculate_basic_metrics(tasks: Sequence[Task]) -> BasicMetrics:
    completed = sum(1 for t in tasks if t.completed)
    return BasicMetrics(
        total=len(tasks),
        completed=completed,
        incomplete=len(tasks) - completed,
        important=sum(1 for t in tasks if t.important and not t.completed),
        planned=sum(1 for t in tasks if is_planned(t)),
    )


def calculate_date_metrics(
    tasks: Sequence[Task],
    *,
    now: datetime,
    week_starts_on: int = 0,
) -> DateMetrics:
    return DateMetrics(
        due_today=sum(1 for t in tasks if is_due_today(t, now)),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        completed_today=sum(1 for t in tasks if completed_today(t, now)),
        completed_this_week=sum(1 for t in tasks if completed_this_week(t, now, week_starts_on)),
    )


def calculate_average_completion_time(tasks: Sequence[Task]) -> float:
    """Mean whole hours from creation to last update over completed tasks."""
    done = [t for t in tasks if t.completed]
    if not done:
        return 0.0
    total_hours = 0
    for t in done:
        hours = int((t.updated_at - t.created_at).total_seconds() // 3600)
        total_hours += max(0, hours)
    return _round_half_up(total_hours / len(done))


def calculate_task_creation_rate(tasks: Sequence[Task], *, now: datetime) -> float:
    since = now - timedelta(days=TRAILING_DAYS)
    recent = sum(1 for t in tasks if t.created_at >= since)
    return _round_half_up(recent / TRAILING_DAYS, 1)


def calculate_daily_completion_average(tasks: Sequence[Task], *, now: datetime) -> float:
    since = now - timedelta(days=TRAILING_DAYS)
    recent = sum(1 for t in tasks if t.completed and t.updated_at >= since)
    return _round_half_up(recent / TRAILING_DAYS, 1)


def calculate_productivity_streak(tasks: Sequence[Task], *, now: datetime) -> int:
    """
    Consecutive days with at least one completion, walking back from today.

    Today may have no completions yet without breaking the streak; any
    earlier empty day ends it.
    """
    days = {t.updated_at.date() for t in tasks if t.completed}
    if not days:
        return 0

    check = now.date()
    if check not in days:
        check -= timedelta(days=1)

    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak


def calculate_productivity_metrics(tasks: Sequence[Task], *, now: datetime) -> ProductivityMetrics:
    return ProductivityMetrics(
        average_completion_time=calculate_average_completion_time(tasks),
        task_creation_rate=calculate_task_creation_rate(tasks, now=now),
        productivity_streak=calculate_productivity_streak(tasks, now=now),
        daily_completion_average=calculate_daily_completion_average(tasks, now=now),
    )


def calculate_completion_rate(total: int, completed: int) -> int:
    if total <= 0:
        return 0
    return int(_round_half_up(completed / total * 100))


# ---- trends ----


class TrendDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class Trend:
    direction: TrendDirection
    value: float
    label: str


def calculate_trend(current: float, previous: float) -> Trend | None:
    if previous == 0:
        if current > 0:
            return Trend(TrendDirection.UP, current, "new")
        return None

    change = current - previous
    percent = int(_round_half_up(change / previous * 100))
    magnitude = abs(percent)

    if magnitude < TREND_STABLE_PERCENT:
        return Trend(TrendDirection.NEUTRAL, magnitude, "stable")

    direction = TrendDirection.UP if change > 0 else TrendDirection.DOWN
    return Trend(direction, magnitude, f"{magnitude}%")


@dataclass(frozen=True, slots=True)
class PeriodStats:
    total: int
    completed: int
    important: int
    planned: int
    due_today: int
    overdue: int
    completion_rate: int


def previous_week_stats(
    tasks: Sequence[Task],
    *,
    now: datetime,
    week_starts_on: int = 0,
) -> PeriodStats:
    """Same basic/date metrics over the tasks last touched during the previous calendar week."""
    anchor = start_of_day(now) - timedelta(weeks=1)
    lo = start_of_week(anchor, week_starts_on)
    hi = end_of_week(anchor, week_starts_on)
    last_week = [t for t in tasks if lo <= t.updated_at <= hi]

    basic = calculate_basic_metrics(last_week)
    dates = calculate_date_metrics(last_week, now=now, week_starts_on=week_starts_on)
    return PeriodStats(
        total=basic.total,
        completed=basic.completed,
        important=basic.important,
        planned=basic.planned,
        due_today=dates.due_today,
        overdue=dates.overdue,
        completion_rate=calculate_completion_rate(basic.total, basic.completed),
    )


# ---- view bundle ----


def filter_tasks_by_view(
    tasks: Sequence[Task],
    view: ViewType,
    *,
    list_id: str | None = None,
    category_id: str | None = None,
) -> list[Task]:
    """
    Statistics scope for a view.

    Unlike the display query, completion state is kept so that completed
    counts and rates are meaningful.
    """
    if view == ViewType.MY_DAY:
        return [t for t in tasks if t.my_day]
    if view == ViewType.IMPORTANT:
        return [t for t in tasks if t.important]
    if view == ViewType.PLANNED:
        return [t for t in tasks if is_planned(t)]
    if view == ViewType.COMPLETED:
        return [t for t in tasks if t.completed]
    if view == ViewType.LIST:
        return [t for t in tasks if t.list_id == list_id] if list_id else []
    if view == ViewType.CATEGORY:
        return [t for t in tasks if category_id in t.category_ids] if category_id else []
    return list(tasks)


@dataclass(frozen=True, slots=True)
class Trends:
    completed: Trend | None
    important: Trend | None
    planned: Trend | None
    due_today: Trend | None
    overdue: Trend | None
    completion_rate: Trend | None


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total_tasks: int
    completed_tasks: int
    incomplete_tasks: int
    important_tasks: int
    planned_tasks: int

    due_today: int
    overdue: int
    completed_today: int
    completed_this_week: int

    completion_rate: int

    average_completion_time: float
    task_creation_rate: float
    productivity_streak: int
    daily_completion_average: float

    trends: Trends


def compute_statistics(
    tasks: Sequence[Task],
    view: ViewType,
    *,
    now: datetime,
    list_id: str | None = None,
    category_id: str | None = None,
    week_starts_on: int = 0,
) -> TaskStatistics:
    scoped = filter_tasks_by_view(tasks, view, list_id=list_id, category_id=category_id)

    basic = calculate_basic_metrics(scoped)
    dates = calculate_date_metrics(tasks, now=now, week_starts_on=week_starts_on)
    productivity = calculate_productivity_metrics(tasks, now=now)
    rate = calculate_completion_rate(basic.total, basic.completed)
    prev = previous_week_stats(tasks, now=now, week_starts_on=week_starts_on)

    return TaskStatistics(
        total_tasks=basic.total,
        completed_tasks=basic.completed,
        incomplete_tasks=basic.incomplete,
        important_tasks=basic.important,
        planned_tasks=basic.planned,
        due_today=dates.due_today,
        overdue=dates.overdue,
        completed_today=dates.completed_today,
        completed_this_week=dates.completed_this_week,
        completion_rate=rate,
        average_completion_time=productivity.average_completion_time,
        task_creation_rate=productivity.task_creation_rate,
        productivity_streak=productivity.productivity_streak,
        daily_completion_average=productivity.daily_completion_average,
        trends=Trends(
            completed=calculate_trend(dates.completed_this_week, prev.completed),
            important=calculate_trend(basic.important, prev.important),
            planned=calculate_trend(basic.planned, prev.planned),
            due_today=calculate_trend(dates.due_today, prev.due_today),
            overdue=calculate_trend(dates.overdue, prev.overdue),
            completion_rate=calculate_trend(rate, prev.completion_rate),
        ),
    )
