"""Task resolution and streak engine for lifeos."""

from lifeos.engine.location import (
    is_location_allowed,
    filter_tasks_by_location,
    allowed_locations,
    has_location_restrictions,
)
from lifeos.engine.ranking import sort_task_views
from lifeos.engine.streak import StreakCalculator
from lifeos.engine.resolution import InstanceResolver
from lifeos.engine.calendar import CalendarAggregator
from lifeos.engine.stats import StatsAggregator

__all__ = [
    "is_location_allowed",
    "filter_tasks_by_location",
    "allowed_locations",
    "has_location_restrictions",
    "sort_task_views",
    "StreakCalculator",
    "InstanceResolver",
    "CalendarAggregator",
    "StatsAggregator",
]
