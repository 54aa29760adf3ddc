"""Task definition model for lifeos."""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class RecurrenceKind(str, Enum):
    """Recurrence rule kind."""
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class TaskInputType(str, Enum):
    """How a task is answered when completed."""
    CHECKBOX = "checkbox"
    COUNTER = "counter"
    DROPDOWN = "dropdown"
    TEXT = "text"


class Importance(str, Enum):
    """Display-only importance label."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LocationType(str, Enum):
    """Locations a user can be at."""
    HOME = "home"
    OFFICE = "office"
    BENGALURU = "bengaluru"
    NATIVE = "native"
    OUTSIDE = "outside"


class RecurrenceRule(BaseModel):
    """When a task is scheduled.

    Weekdays use 0=Sunday .. 6=Saturday.
    A weekly rule without weekdays, or a monthly rule without a day of month,
    never occurs.
    """

    kind: RecurrenceKind = Field(..., description="Recurrence kind")
    days_of_week: Optional[List[int]] = Field(
        None, description="Weekdays for weekly/custom rules (0=Sunday .. 6=Saturday)"
    )
    day_of_month: Optional[int] = Field(
        None, ge=1, le=31, description="Day of month for monthly/custom rules"
    )
    start_date: date = Field(..., description="First day the rule may occur")
    end_date: Optional[date] = Field(None, description="Last day the rule may occur (inclusive)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    @field_validator("days_of_week")
    @classmethod
    def _validate_days_of_week(cls, v):
        if v is None:
            return None
        seen = set()
        out: List[int] = []
        for day in v:
            if day < 0 or day > 6:
                raise ValueError("days_of_week entries must be between 0 (Sunday) and 6 (Saturday)")
            if day not in seen:
                seen.add(day)
                out.append(day)
        return out

    @field_validator("end_date")
    @classmethod
    def _validate_end_date(cls, v, info):
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("end_date must be >= start_date")
        return v


class ReminderConfig(BaseModel):
    """Reminder settings (stored, never delivered by lifeos)."""

    time: str = Field(..., description="Reminder time (HH:mm)")
    early_reminder_days: Optional[int] = Field(None, ge=0)
    silent: bool = False
    snap_reminder_enabled: bool = False


class LocationCondition(BaseModel):
    """Location gate for a task. Excluded locations win over allowed ones."""

    allowed_locations: Optional[List[LocationType]] = None
    excluded_locations: Optional[List[LocationType]] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Task(BaseModel):
    """Recurring task definition."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    title: str = Field(..., description="Task title")
    input_type: TaskInputType = Field(TaskInputType.CHECKBOX, description="Input kind")
    recurrence: RecurrenceRule
    reminder: Optional[ReminderConfig] = None
    location_condition: Optional[LocationCondition] = None
    streak_enabled: bool = Field(False, description="Whether streaks are tracked")
    importance: Optional[Importance] = Field(None, description="Display-only importance label")
    priority: int = Field(0, description="Display order (lower = shown first)")
    is_archived: bool = False
    created_at: datetime = Field(..., description="Task creation timestamp")
    dropdown_options: Optional[List[str]] = Field(None, description="Choices for dropdown tasks")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    @model_validator(mode="after")
    def _validate_dropdown_options(self):
        if self.dropdown_options and TaskInputType(self.input_type) != TaskInputType.DROPDOWN:
            raise ValueError("dropdown_options are only valid for dropdown tasks")
        return self
