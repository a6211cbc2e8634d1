# src/taskdeck/tasks/recurrence.py

from __future__ import annotations

"""
Recurrence scheduler.

A single pass (run at store start-up, never on a timer) that:
- finds completed repeating tasks whose due day is already behind us,
- moves their due date to the next occurrence,
- reopens them and takes them off My Day.

A client that stays closed for a while only catches up on the next load,
and each task moves forward by exactly one occurrence per pass.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from ..core.dates import start_of_day, sunday_index
from ..core.models import RepeatKind, Task

logger = logging.getLogger(__name__)

_MAX_WEEKDAY_SCAN = 7


def next_due_date(
    current: datetime,
    repeat: RepeatKind,
    repeat_days: Iterable[int] = (),
) -> datetime:
    """
    Next occurrence after `current`.

    Month/year steps clamp to the last day of the target month (Jan 31 -> Feb 28).
    Daily tasks with weekday selection return the first selected weekday after
    `current`; the time of day is preserved.
    """
    if repeat == RepeatKind.WEEKLY:
        return current + timedelta(weeks=1)
    if repeat == RepeatKind.MONTHLY:
        return current + relativedelta(months=1)
    if repeat == RepeatKind.YEARLY:
        return current + relativedelta(years=1)
    if repeat == RepeatKind.DAILY:
        days = set(repeat_days or ())
        first = current + timedelta(days=1)
        if not days:
            return first
        for offset in range(_MAX_WEEKDAY_SCAN):
            candidate = first + timedelta(days=offset)
            if sunday_index(candidate) in days:
                return candidate
        # Only reachable when repeat_days holds nothing in 0..6.
        return first
    return current


def is_rollover_candidate(task: Task, today: datetime) -> bool:
    return (
        task.completed
        and task.repeat != RepeatKind.NONE
        and task.due_date is not None
        and start_of_day(task.due_date) < start_of_day(today)
    )


def roll_forward(task: Task, now: datetime) -> Task:
    if task.due_date is None:
        return task
    return replace(
        task,
        completed=False,
        due_date=next_due_date(task.due_date, task.repeat, task.repeat_days),
        my_day=False,
        updated_at=now,
    )


def process_repeating_tasks(
    tasks: Iterable[Task],
    *,
    now: datetime,
) -> tuple[tuple[Task, ...], list[str]]:
    """
    Roll every candidate forward once.

    Returns the new task tuple and the ids that were rolled.
    """
    out: list[Task] = []
    rolled: list[str] = []
    for task in tasks:
        if is_rollover_candidate(task, now):
            new_task = roll_forward(task, now)
            rolled.append(task.id)
            logger.debug(
                "Task %s rolled forward repeat=%s due %s -> %s",
                task.id,
                str(task.repeat),
                task.due_date,
                new_task.due_date,
            )
            out.append(new_task)
        else:
            out.append(task)

    if rolled:
        logger.info("Recurring tasks rolled forward: %d", len(rolled))
    return tuple(out), rolled
