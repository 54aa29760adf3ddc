"""lifeos - recurring tasks, streaks and daily tracking."""

__version__ = "0.1.0"
