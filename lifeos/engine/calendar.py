"""Calendar aggregation for lifeos.

Builds one summary per day of a range. Tasks, records, wellness entries and
finance entries are loaded once for the whole range and grouped by date, so
the per-day work needs no further store access.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from lifeos.database.daily_record_repository import DailyRecordRepository
from lifeos.database.finance_repository import FinanceRepository
from lifeos.database.repository import TaskInstanceRepository, TaskRepository
from lifeos.engine.location import filter_tasks_by_location
from lifeos.engine.streak import is_completed, is_streak_broken_on
from lifeos.models.calendar import CalendarDayView
from lifeos.models.constants import (
    ICON_ALL_DONE,
    ICON_FINANCE,
    ICON_NONE_DONE,
    ICON_NOTE,
    ICON_PARTIAL,
    ICON_STREAK_BROKEN,
)
from lifeos.models.instance import TaskInstance
from lifeos.models.task import LocationType, Task
from lifeos.recurrence.dates import DateLike, as_date, daterange, month_bounds
from lifeos.recurrence.engine import occurs_on

logger = logging.getLogger(__name__)


def group_by_date(items: Iterable) -> Dict[date, list]:
    """Group records carrying a `date` attribute by that date."""
    grouped: Dict[date, list] = defaultdict(list)
    for item in items:
        grouped[item.date].append(item)
    return grouped


def generate_icons(
    completed: int,
    total: int,
    has_note: bool,
    has_finance: bool,
    streak_broken: bool,
) -> List[str]:
    """Indicator glyphs for a day, in fixed order: completion, note, finance, streak warning."""
    icons: List[str] = []

    if total > 0:
        if completed == total:
            icons.append(ICON_ALL_DONE)
        elif completed > 0:
            icons.append(ICON_PARTIAL)
        else:
            icons.append(ICON_NONE_DONE)

    if has_note:
        icons.append(ICON_NOTE)

    if has_finance:
        icons.append(ICON_FINANCE)

    if streak_broken:
        icons.append(ICON_STREAK_BROKEN)

    return icons


def build_day_view(
    day: date,
    tasks: List[Task],
    instances: List[TaskInstance],
    has_note: bool,
    has_finance: bool,
    location: LocationType,
) -> CalendarDayView:
    """Summarize one day from preloaded data."""
    scheduled = filter_tasks_by_location([task for task in tasks if occurs_on(task, day)], location)
    by_task: Dict[str, TaskInstance] = {instance.task_id: instance for instance in instances}

    completed = 0
    streak_broken = False
    for task in scheduled:
        instance: Optional[TaskInstance] = by_task.get(task.id)
        if is_completed(instance):
            completed += 1
        elif is_streak_broken_on(task, day, instance):
            streak_broken = True

    return CalendarDayView(
        date=day,
        tasks_completed=completed,
        tasks_total=len(scheduled),
        has_note=has_note,
        has_finance_entry=has_finance,
        streak_broken=streak_broken,
        icons=generate_icons(completed, len(scheduled), has_note, has_finance, streak_broken),
    )


class CalendarAggregator:
    """Multi-day summaries over the store."""

    def __init__(
        self,
        task_repo: TaskRepository,
        instance_repo: TaskInstanceRepository,
        daily_record_repo: DailyRecordRepository,
        finance_repo: FinanceRepository,
    ):
        self.task_repo = task_repo
        self.instance_repo = instance_repo
        self.daily_record_repo = daily_record_repo
        self.finance_repo = finance_repo

    def build_range(self, start: DateLike, end: DateLike, location: LocationType) -> List[CalendarDayView]:
        """One summary per day in [start, end]; empty when start > end."""
        start = as_date(start)
        end = as_date(end)
        if start > end:
            return []

        tasks = self.task_repo.get_active()
        instances_by_date = group_by_date(self.instance_repo.get_by_date_range(start, end))
        note_dates: Set[date] = {record.date for record in self.daily_record_repo.get_by_date_range(start, end)}
        finance_dates: Set[date] = {entry.date for entry in self.finance_repo.get_by_date_range(start, end)}
        logger.debug(
            f"Building calendar {start}..{end}: {len(tasks)} tasks, "
            f"{sum(len(v) for v in instances_by_date.values())} instances"
        )

        return [
            build_day_view(
                day,
                tasks,
                instances_by_date.get(day, []),
                day in note_dates,
                day in finance_dates,
                location,
            )
            for day in daterange(start, end)
        ]

    def build_for_month(self, year: int, month: int, location: LocationType) -> List[CalendarDayView]:
        """Summaries for every day of a month (month is 1-12)."""
        start, end = month_bounds(year, month)
        return self.build_range(start, end, location)
