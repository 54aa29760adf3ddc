"""Cross-task statistics built on calendar day summaries.

A "perfect day" is a day whose scheduled tasks were all completed. Days with
nothing scheduled are free: they neither break nor extend a perfect-day
streak.
"""

import logging
import math
from datetime import date, timedelta
from typing import List, Optional, Tuple

from lifeos.database.daily_record_repository import DailyRecordRepository
from lifeos.engine.calendar import CalendarAggregator
from lifeos.models.calendar import CalendarDayView, StatsSummary, WeightTrend
from lifeos.models.constants import STATS_WINDOW_DAYS, WEIGHT_STABLE_TOLERANCE_KG
from lifeos.models.daily_record import DailyRecord
from lifeos.models.task import LocationType
from lifeos.recurrence.dates import DateLike, as_date

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_perfect(day: CalendarDayView) -> bool:
    return day.tasks_completed == day.tasks_total


def perfect_day_streak(days: List[CalendarDayView]) -> int:
    """Perfect days counted backward from the last day until one falls short."""
    streak = 0
    for day in reversed(days):
        if day.tasks_total == 0:
            continue
        if not _is_perfect(day):
            break
        streak += 1
    return streak


def longest_perfect_day_streak(days: List[CalendarDayView]) -> int:
    longest = 0
    current = 0
    for day in days:
        if day.tasks_total == 0:
            continue
        if _is_perfect(day):
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def completion_rate(days: List[CalendarDayView]) -> int:
    """Completed over scheduled tasks summed across days, as a rounded percentage.

    Returns 0 when nothing was scheduled.
    """
    scheduled = sum(day.tasks_total for day in days)
    if scheduled == 0:
        return 0
    completed = sum(day.tasks_completed for day in days)
    return _round_half_up(completed / scheduled * 100)


def average_water_intake(records: List[DailyRecord], start: date, end: date) -> int:
    """Average water per day over [start, end]; days without a record count as 0."""
    in_window = [record for record in records if start <= record.date <= end]
    if not in_window or start > end:
        return 0
    total = sum(record.water_intake or 0 for record in in_window)
    return _round_half_up(total / ((end - start).days + 1))


def weight_trend(records: List[DailyRecord]) -> Tuple[WeightTrend, Optional[float]]:
    """Compare the two most recent weight entries.

    Returns:
        Tuple of (trend, latest weight). A change within the tolerance is
        stable; a single entry is reported as the initial weight.
    """
    weighed = sorted((record for record in records if record.weight), key=lambda r: r.date)
    if not weighed:
        return WeightTrend.NO_DATA, None

    latest = weighed[-1].weight
    if len(weighed) == 1:
        return WeightTrend.INITIAL, latest

    previous = weighed[-2].weight
    if latest > previous + WEIGHT_STABLE_TOLERANCE_KG:
        return WeightTrend.RISING, latest
    if latest < previous - WEIGHT_STABLE_TOLERANCE_KG:
        return WeightTrend.FALLING, latest
    return WeightTrend.STABLE, latest


def summarize(
    days: List[CalendarDayView],
    records: List[DailyRecord],
    window_days: int = STATS_WINDOW_DAYS,
) -> StatsSummary:
    """Build statistics from preloaded day summaries and wellness records.

    Streaks use every day given; the completion rate and water average use
    only the last window_days of them.
    """
    if not days:
        raise ValueError("summarize needs at least one day")

    recent = days[-window_days:]
    trend, latest_weight = weight_trend(records)

    return StatsSummary(
        start=days[0].date,
        end=days[-1].date,
        current_perfect_streak=perfect_day_streak(days),
        longest_perfect_streak=longest_perfect_day_streak(days),
        completion_rate=completion_rate(recent),
        average_water_intake=average_water_intake(records, recent[0].date, recent[-1].date),
        weight_trend=trend,
        latest_weight=latest_weight,
    )


class StatsAggregator:
    """Statistics over the store for a date range."""

    def __init__(self, calendar: CalendarAggregator, daily_record_repo: DailyRecordRepository):
        self.calendar = calendar
        self.daily_record_repo = daily_record_repo

    def build(self, start: DateLike, end: DateLike, location: LocationType) -> StatsSummary:
        """Statistics for [start, end] at a location.

        Raises:
            ValueError: If start is after end
        """
        start = as_date(start)
        end = as_date(end)
        if start > end:
            raise ValueError("start must be <= end")

        days = self.calendar.build_range(start, end, location)
        records = self.daily_record_repo.get_by_date_range(start, end)
        logger.debug(f"Building stats {start}..{end}: {len(days)} days, {len(records)} wellness records")
        return summarize(days, records)

    def build_recent(self, end: DateLike, lookback_days: int, location: LocationType) -> StatsSummary:
        """Statistics for the lookback_days days ending at end (inclusive)."""
        end = as_date(end)
        return self.build(end - timedelta(days=lookback_days - 1), end, location)
