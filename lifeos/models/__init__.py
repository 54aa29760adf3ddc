"""Data models for lifeos."""

from lifeos.models.task import (
    Task,
    RecurrenceRule,
    RecurrenceKind,
    ReminderConfig,
    LocationCondition,
    LocationType,
    TaskInputType,
    Importance,
)
from lifeos.models.instance import TaskInstance, TaskInstanceView, InstanceStatus, instance_id_for
from lifeos.models.calendar import CalendarDayView, StatsSummary, StreakStats, WeightTrend
from lifeos.models.daily_record import DailyRecord
from lifeos.models.finance import FinanceEntry
from lifeos.models.settings import UserSettings

__all__ = [
    "Task",
    "RecurrenceRule",
    "RecurrenceKind",
    "ReminderConfig",
    "LocationCondition",
    "LocationType",
    "TaskInputType",
    "Importance",
    "TaskInstance",
    "TaskInstanceView",
    "InstanceStatus",
    "instance_id_for",
    "CalendarDayView",
    "StreakStats",
    "StatsSummary",
    "WeightTrend",
    "DailyRecord",
    "FinanceEntry",
    "UserSettings",
]
