"""Location gating for lifeos tasks.

A task without a location condition is shown everywhere. Excluded
locations always win over allowed locations.
"""

from typing import List

from lifeos.models.constants import ALL_LOCATIONS
from lifeos.models.task import LocationType, Task


def is_location_allowed(task: Task, current_location: LocationType) -> bool:
    """Check if a task should be shown at the current location.

    Args:
        task: The task to check
        current_location: Where the user currently is

    Returns:
        True if the task is visible at this location
    """
    condition = task.location_condition
    if condition is None:
        return True

    # Excluded locations take precedence
    if condition.excluded_locations and current_location in condition.excluded_locations:
        return False

    if condition.allowed_locations:
        return current_location in condition.allowed_locations

    return True


def filter_tasks_by_location(tasks: List[Task], current_location: LocationType) -> List[Task]:
    """Keep tasks visible at the current location, preserving order."""
    return [task for task in tasks if is_location_allowed(task, current_location)]


def allowed_locations(task: Task) -> List[str]:
    """All locations where a task is visible.

    Allowed locations minus excluded ones when an allow-list is given,
    otherwise every known location minus excluded ones.
    """
    condition = task.location_condition
    if condition is None:
        return list(ALL_LOCATIONS)

    excluded = set(condition.excluded_locations or [])
    base = condition.allowed_locations or ALL_LOCATIONS
    return [location for location in base if location not in excluded]


def has_location_restrictions(task: Task) -> bool:
    """True if the task has a non-empty allow- or deny-list."""
    condition = task.location_condition
    if condition is None:
        return False
    return bool(condition.allowed_locations) or bool(condition.excluded_locations)
