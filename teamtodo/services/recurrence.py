"""Recurrence calculator - calendar arithmetic for repeating todos.

Pure functions only: no database, no clock. Everything that decides *when* a
todo repeats goes through ``next_due_date``.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import TypeVar

from teamtodo.db.enums import RecurrenceType

# datetime is a subclass of date, so both flow through unchanged
DateT = TypeVar("DateT", bound=date)

_FIXED_INTERVALS = {
    RecurrenceType.DAILY: timedelta(days=1),
    RecurrenceType.WEEKLY: timedelta(days=7),
    RecurrenceType.BIWEEKLY: timedelta(days=14),
}


def add_months(value: DateT, months: int) -> DateT:
    """
    Move ``value`` by whole calendar months.

    The day of month is clamped to the last day of the target month
    (Jan 31 + 1 month = Feb 28/29, Mar 31 + 1 month = Apr 30).
    Time of day and tzinfo are preserved for datetimes.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def add_years(value: DateT, years: int) -> DateT:
    """Move ``value`` by whole calendar years (Feb 29 clamps to Feb 28)."""
    return add_months(value, years * 12)


def next_due_date(current: DateT, recurrence: RecurrenceType | str) -> DateT | None:
    """
    Return the next due date for a todo repeating at ``recurrence``.

    Returns None for RecurrenceType.NONE; callers treat that as
    "not a repeating todo".
    """
    recurrence = RecurrenceType(recurrence)

    if recurrence == RecurrenceType.NONE:
        return None
    if recurrence in _FIXED_INTERVALS:
        return current + _FIXED_INTERVALS[recurrence]
    if recurrence == RecurrenceType.MONTHLY:
        return add_months(current, 1)
    if recurrence == RecurrenceType.YEARLY:
        return add_years(current, 1)

    raise ValueError(f"Unhandled recurrence type: {recurrence!r}")
