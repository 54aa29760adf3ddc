"""Repository for the singleton UserSettings row."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from lifeos.database.store import Store, SETTINGS
from lifeos.models.constants import SETTINGS_KEY
from lifeos.models.settings import UserSettings
from lifeos.models.task import LocationType

logger = logging.getLogger(__name__)


class SettingsRepository:
    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def get(self) -> UserSettings:
        """Stored settings, or defaults when nothing has been saved yet."""
        stored = self.store.get(SETTINGS, SETTINGS_KEY)
        return stored if stored is not None else UserSettings()

    def update(self, **changes: Any) -> UserSettings:
        """Merge changes into the stored settings (validated) and save."""
        current = self.get()
        updated = UserSettings.model_validate({**current.model_dump(), **changes})
        self.store.put(SETTINGS, updated)
        logger.debug(f"Updated settings: {sorted(changes)}")
        return updated

    def update_location(self, location: LocationType) -> UserSettings:
        return self.update(current_location=location)

    def toggle_finance(self) -> UserSettings:
        return self.update(finance_enabled=not self.get().finance_enabled)

    def toggle_morning_alarm(self) -> UserSettings:
        return self.update(morning_alarm_enabled=not self.get().morning_alarm_enabled)

    def update_default_reminder_time(self, time: str) -> UserSettings:
        return self.update(default_reminder_time=time)

    def reset(self) -> UserSettings:
        defaults = UserSettings()
        self.store.put(SETTINGS, defaults)
        return defaults
