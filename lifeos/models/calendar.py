"""Calendar aggregate models."""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class CalendarDayView(BaseModel):
    """Aggregated summary of one calendar day."""

    date: date
    tasks_completed: int = 0
    tasks_total: int = 0
    has_note: bool = False
    has_finance_entry: bool = False
    streak_broken: bool = False
    icons: List[str] = Field(default_factory=list)


class StreakStats(BaseModel):
    """Streak statistics for one task."""

    current_streak: int = 0
    longest_streak: int = 0
    total_completions: int = 0
    total_occurrences: int = 0
    completion_rate: float = Field(0.0, ge=0.0, le=100.0)


class WeightTrend(str, Enum):
    """Direction of the two most recent weight entries."""
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"
    INITIAL = "initial"  # Only one weight entry so far
    NO_DATA = "no_data"


class StatsSummary(BaseModel):
    """Cross-task statistics over a range of calendar days."""

    start: date
    end: date
    current_perfect_streak: int = Field(0, description="Fully completed days ending at end (free days skipped)")
    longest_perfect_streak: int = 0
    completion_rate: int = Field(0, ge=0, le=100, description="Completed/scheduled over the recent window, rounded")
    average_water_intake: int = Field(0, ge=0, description="Average ml per day over the recent window")
    weight_trend: WeightTrend = WeightTrend.NO_DATA
    latest_weight: Optional[float] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
