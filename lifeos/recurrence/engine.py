"""Decide on which calendar days a task is scheduled.

Rules never raise for missing fields: a weekly rule without weekdays or a
monthly rule without a day of month simply has no occurrences, and an
unrecognized rule kind never occurs.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from lifeos.models.constants import OCCURRENCE_HORIZON_DAYS
from lifeos.models.task import RecurrenceKind, RecurrenceRule, Task
from lifeos.recurrence.dates import DateLike, as_date, daterange, weekday_number


def _matches_weekdays(rule: RecurrenceRule, day: date) -> bool:
    if not rule.days_of_week:
        return False
    return weekday_number(day) in rule.days_of_week


def _matches_day_of_month(rule: RecurrenceRule, day: date) -> bool:
    if not rule.day_of_month:
        return False
    return day.day == rule.day_of_month


def _matches_custom(rule: RecurrenceRule, day: date) -> bool:
    # Each check applies only when its field is set; both set means both must hold.
    weekly_match = _matches_weekdays(rule, day) if rule.days_of_week else True
    monthly_match = _matches_day_of_month(rule, day) if rule.day_of_month else True
    return weekly_match and monthly_match


def rule_occurs_on(rule: RecurrenceRule, day: date) -> bool:
    """Evaluate a bare rule for a calendar day."""
    if day < rule.start_date:
        return False
    if rule.end_date and day > rule.end_date:
        return False

    if rule.kind == RecurrenceKind.ONCE:
        return day == rule.start_date

    if rule.kind == RecurrenceKind.DAILY:
        return True

    if rule.kind == RecurrenceKind.WEEKLY:
        return _matches_weekdays(rule, day)

    if rule.kind == RecurrenceKind.MONTHLY:
        return _matches_day_of_month(rule, day)

    if rule.kind == RecurrenceKind.CUSTOM:
        return _matches_custom(rule, day)

    return False


def occurs_on(task: Task, day: DateLike) -> bool:
    """Check if a task is scheduled on a calendar day (time of day is ignored)."""
    return rule_occurs_on(task.recurrence, as_date(day))


def occurrence_dates_in_range(task: Task, start: DateLike, end: DateLike) -> List[date]:
    """All occurrence days in [start, end], ascending."""
    return [day for day in daterange(as_date(start), as_date(end)) if occurs_on(task, day)]


def next_occurrence_after(
    task: Task, day: DateLike, horizon_days: int = OCCURRENCE_HORIZON_DAYS
) -> Optional[date]:
    """First occurrence strictly after day, searching at most horizon_days ahead."""
    cur = as_date(day)
    for _ in range(horizon_days):
        cur = cur + timedelta(days=1)
        if occurs_on(task, cur):
            return cur
    return None


def previous_occurrence_before(
    task: Task, day: DateLike, horizon_days: int = OCCURRENCE_HORIZON_DAYS
) -> Optional[date]:
    """Last occurrence strictly before day, searching at most horizon_days back."""
    cur = as_date(day)
    for _ in range(horizon_days):
        cur = cur - timedelta(days=1)
        if occurs_on(task, cur):
            return cur
    return None
