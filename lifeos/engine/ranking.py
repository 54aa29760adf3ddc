"""Display ordering for resolved tasks.

Tasks are ordered by numeric priority (lower first), then by title.
The importance label is display-only and does not affect ordering.
"""

from typing import List

from lifeos.models.instance import TaskInstanceView


def sort_task_views(views: List[TaskInstanceView]) -> List[TaskInstanceView]:
    """Sort resolved views by priority, then title.

    This function is deterministic - same inputs always produce same outputs.

    Args:
        views: Resolved views to sort

    Returns:
        New list sorted for display
    """
    return sorted(views, key=_view_sort_key)


def _view_sort_key(view: TaskInstanceView) -> tuple:
    """Priority ascending, then case-insensitive title, then exact title and id as tie-breakers."""
    task = view.task
    return (task.priority, task.title.casefold(), task.title, task.id)
