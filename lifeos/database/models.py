"""SQLAlchemy database models for lifeos."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Float, Boolean, Date, DateTime, JSON, ForeignKey, UniqueConstraint

from lifeos.database.database import Base
from lifeos.models.constants import SETTINGS_KEY


def model_to_json(model: Optional[BaseModel]) -> Optional[dict]:
    """Dump an embedded Pydantic model for a JSON column (None stays None)."""
    if model is None:
        return None
    return model.model_dump(mode="json")


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    input_type = Column(String, nullable=False, default="checkbox")

    # Embedded configuration (stored as JSON objects)
    recurrence = Column(JSON, nullable=False)
    reminder = Column(JSON, nullable=True)
    location_condition = Column(JSON, nullable=True)
    dropdown_options = Column(JSON, nullable=True)

    streak_enabled = Column(Boolean, nullable=False, default=False)
    importance = Column(String, nullable=True)
    priority = Column(Integer, nullable=False, default=0, index=True)
    is_archived = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from lifeos.models.task import Task

        return Task(
            id=self.id,
            title=self.title,
            input_type=self.input_type,
            recurrence=self.recurrence,
            reminder=self.reminder,
            location_condition=self.location_condition,
            streak_enabled=self.streak_enabled,
            importance=self.importance,
            priority=self.priority,
            is_archived=self.is_archived,
            created_at=self.created_at,
            dropdown_options=self.dropdown_options,
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            title=task.title,
            input_type=task.input_type,
            recurrence=model_to_json(task.recurrence),
            reminder=model_to_json(task.reminder),
            location_condition=model_to_json(task.location_condition),
            dropdown_options=task.dropdown_options,
            streak_enabled=task.streak_enabled,
            importance=task.importance,
            priority=task.priority,
            is_archived=task.is_archived,
            created_at=task.created_at,
        )


class TaskInstanceDB(Base):
    """Database model for TaskInstance (one row per task and date)."""

    __tablename__ = "task_instances"
    __table_args__ = (
        UniqueConstraint("task_id", "date", name="uq_task_instance_task_date"),
    )

    # Composite id "<task_id>_<YYYY-MM-DD>"
    id = Column(String, primary_key=True)
    task_id = Column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    # int, float or str answer
    value = Column(JSON, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from lifeos.models.instance import TaskInstance

        return TaskInstance(
            id=self.id,
            task_id=self.task_id,
            date=self.date,
            status=self.status,
            value=self.value,
            completed_at=self.completed_at,
        )

    @classmethod
    def from_pydantic(cls, instance):
        """Create database model from Pydantic model."""
        return cls(
            id=instance.id,
            task_id=instance.task_id,
            date=instance.date,
            status=instance.status,
            value=instance.value,
            completed_at=instance.completed_at,
        )


class DailyRecordDB(Base):
    """Database model for DailyRecord (keyed by date)."""

    __tablename__ = "daily_records"

    date = Column(Date, primary_key=True)
    water_intake = Column(Integer, nullable=True)
    fruit_intake = Column(JSON, nullable=True)
    weight = Column(Float, nullable=True)
    sleep_hours = Column(Float, nullable=True)
    notes = Column(String, nullable=True)
    voice_note_url = Column(String, nullable=True)
    selfie_url = Column(String, nullable=True)
    location = Column(String, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from lifeos.models.daily_record import DailyRecord

        return DailyRecord(
            date=self.date,
            water_intake=self.water_intake,
            fruit_intake=self.fruit_intake,
            weight=self.weight,
            sleep_hours=self.sleep_hours,
            notes=self.notes,
            voice_note_url=self.voice_note_url,
            selfie_url=self.selfie_url,
            location=self.location,
        )

    @classmethod
    def from_pydantic(cls, record):
        """Create database model from Pydantic model."""
        return cls(
            date=record.date,
            water_intake=record.water_intake,
            fruit_intake=record.fruit_intake,
            weight=record.weight,
            sleep_hours=record.sleep_hours,
            notes=record.notes,
            voice_note_url=record.voice_note_url,
            selfie_url=record.selfie_url,
            location=record.location,
        )


class FinanceEntryDB(Base):
    """Database model for FinanceEntry."""

    __tablename__ = "finance_entries"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    title = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from lifeos.models.finance import FinanceEntry

        return FinanceEntry(
            id=self.id,
            date=self.date,
            title=self.title,
            amount=self.amount,
            category=self.category,
        )

    @classmethod
    def from_pydantic(cls, entry):
        """Create database model from Pydantic model."""
        return cls(
            id=entry.id,
            date=entry.date,
            title=entry.title,
            amount=entry.amount,
            category=entry.category,
        )


class SettingsDB(Base):
    """Database model for UserSettings (singleton row)."""

    __tablename__ = "settings"

    id = Column(String, primary_key=True, default=SETTINGS_KEY)
    current_location = Column(String, nullable=False, default="home")
    finance_enabled = Column(Boolean, nullable=False, default=False)
    default_reminder_time = Column(String, nullable=True)
    morning_alarm_enabled = Column(Boolean, nullable=False, default=False)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from lifeos.models.settings import UserSettings

        return UserSettings(
            current_location=self.current_location,
            finance_enabled=self.finance_enabled,
            default_reminder_time=self.default_reminder_time,
            morning_alarm_enabled=self.morning_alarm_enabled,
        )

    @classmethod
    def from_pydantic(cls, settings):
        """Create database model from Pydantic model."""
        return cls(
            id=SETTINGS_KEY,
            current_location=settings.current_location,
            finance_enabled=settings.finance_enabled,
            default_reminder_time=settings.default_reminder_time,
            morning_alarm_enabled=settings.morning_alarm_enabled,
        )
