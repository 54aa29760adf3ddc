"""User settings model."""

from typing import Optional

from pydantic import BaseModel

from lifeos.models.constants import DEFAULT_LOCATION, DEFAULT_REMINDER_TIME
from lifeos.models.task import LocationType


class UserSettings(BaseModel):
    """User preferences (a single row per installation)."""

    current_location: LocationType = DEFAULT_LOCATION
    finance_enabled: bool = False
    default_reminder_time: Optional[str] = DEFAULT_REMINDER_TIME
    morning_alarm_enabled: bool = False

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
