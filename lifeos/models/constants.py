"""Constants for lifeos.

This module centralizes magic numbers and default values used throughout the application.
"""

from lifeos.models.task import LocationType


# Occurrence search
OCCURRENCE_HORIZON_DAYS = 365  # Bounded scan for next/previous occurrence

# Locations
DEFAULT_LOCATION = LocationType.HOME
ALL_LOCATIONS = [
    LocationType.HOME.value,
    LocationType.OFFICE.value,
    LocationType.BENGALURU.value,
    LocationType.NATIVE.value,
    LocationType.OUTSIDE.value,
]

# Settings defaults
DEFAULT_REMINDER_TIME = "09:00"
SETTINGS_KEY = "default"  # Settings are a singleton row

# Calendar indicator glyphs (rendered in this fixed order)
ICON_ALL_DONE = "✓"
ICON_PARTIAL = "◐"
ICON_NONE_DONE = "○"
ICON_NOTE = "📝"
ICON_FINANCE = "💰"
ICON_STREAK_BROKEN = "⚠️"

# Statistics
STATS_LOOKBACK_DAYS = 60  # Default history for perfect-day streaks
STATS_WINDOW_DAYS = 7  # Recent window for completion rate and water average
WEIGHT_STABLE_TOLERANCE_KG = 0.1
