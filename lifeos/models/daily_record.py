"""Daily wellness record model."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from lifeos.models.task import LocationType


class DailyRecord(BaseModel):
    """Wellness tracking for one day (keyed by date)."""

    date: date
    water_intake: Optional[int] = Field(None, ge=0, description="Water intake in ml")
    fruit_intake: Optional[List[str]] = None
    weight: Optional[float] = Field(None, gt=0, description="Weight in kg")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    notes: Optional[str] = None
    voice_note_url: Optional[str] = None
    selfie_url: Optional[str] = None
    location: Optional[LocationType] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
