"""Calendar-day helpers. All dates are naive calendar days."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """Normalize a date, datetime or 'YYYY-MM-DD' string to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def weekday_number(day: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday."""
    # Python weekday: Monday=0 ... Sunday=6
    return (day.weekday() + 1) % 7


def daterange(start: date, end: date) -> Iterator[date]:
    """Every day from start to end, both inclusive."""
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month (month is 1-12)."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))
