"""Per-date task completion records and resolved views."""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from lifeos.models.task import Task


class InstanceStatus(str, Enum):
    """Completion status of a task on a date."""
    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


InstanceValue = Union[int, float, str]


def instance_id_for(task_id: str, day: date) -> str:
    """Deterministic record id for a (task, date) pair."""
    return f"{task_id}_{day.isoformat()}"


class TaskInstance(BaseModel):
    """State of one task on one date. A missing record means pending."""

    id: str = Field(..., description="Composite id '<task_id>_<YYYY-MM-DD>'")
    task_id: str
    date: date
    status: InstanceStatus = InstanceStatus.PENDING
    value: Optional[InstanceValue] = Field(None, description="Counter/dropdown/text answer")
    completed_at: Optional[datetime] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    @classmethod
    def pending(cls, task_id: str, day: date) -> "TaskInstance":
        return cls(id=instance_id_for(task_id, day), task_id=task_id, date=day)


class TaskInstanceView(TaskInstance):
    """A task merged with its record for a date."""

    task: Task
    current_streak: Optional[int] = None
