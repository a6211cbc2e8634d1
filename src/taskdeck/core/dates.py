# src/taskdeck/core/dates.py

"""Calendar-day helpers. All datetimes are naive local time."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def is_today(value: datetime, now: datetime) -> bool:
    return value.date() == now.date()


def is_tomorrow(value: datetime, now: datetime) -> bool:
    return value.date() == now.date() + timedelta(days=1)


def sunday_index(day: date | datetime) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def start_of_week(value: datetime, week_starts_on: int = 0) -> datetime:
    """
    First instant of the week containing `value`.

    week_starts_on uses Python's convention: 0=Monday .. 6=Sunday.
    """
    offset = (value.weekday() - week_starts_on) % 7
    return start_of_day(value) - timedelta(days=offset)


def end_of_week(value: datetime, week_starts_on: int = 0) -> datetime:
    return start_of_week(value, week_starts_on) + timedelta(days=7, microseconds=-1)


def is_this_week(value: datetime, now: datetime, week_starts_on: int = 0) -> bool:
    return start_of_week(now, week_starts_on) <= value <= end_of_week(now, week_starts_on)


def same_moment(a: datetime | None, b: datetime | None) -> bool:
    """None-aware equality used to detect real due-date changes."""
    if a is None or b is None:
        return a is None and b is None
    return a == b
