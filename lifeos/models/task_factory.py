"""Task creation factory for lifeos.

This module centralizes task creation logic so the API and tests
share the same default values.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from lifeos.models.task import Task, TaskInputType, RecurrenceRule


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary."""
    return {
        "input_type": TaskInputType.CHECKBOX,
        "reminder": None,
        "location_condition": None,
        "streak_enabled": False,
        "importance": None,
        "priority": 0,
        "is_archived": False,
        "dropdown_options": None,
    }


def create_task(
    title: str,
    recurrence: RecurrenceRule,
    *,
    task_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    **overrides: Any,
) -> Task:
    """Create a Task with defaults applied.

    Args:
        title: Task title
        recurrence: Recurrence rule (start date required)
        task_id: Explicit id (a UUID v4 is generated when omitted)
        created_at: Creation timestamp (defaults to now, UTC)
        **overrides: Any other Task field

    Returns:
        Task instance
    """
    values = create_task_defaults()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Task(
        id=task_id or str(uuid.uuid4()),
        title=title,
        recurrence=recurrence,
        created_at=created_at or datetime.utcnow(),
        **values,
    )
