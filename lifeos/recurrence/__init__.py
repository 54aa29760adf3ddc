"""Recurrence evaluation for lifeos."""

from lifeos.recurrence.engine import (
    occurs_on,
    occurrence_dates_in_range,
    next_occurrence_after,
    previous_occurrence_before,
)

__all__ = [
    "occurs_on",
    "occurrence_dates_in_range",
    "next_occurrence_after",
    "previous_occurrence_before",
]
