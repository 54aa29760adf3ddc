"""Resolve task definitions and completion records into per-date views.

Records are created lazily: a (task, date) pair without a stored record is
shown as an ephemeral pending instance and only written on complete/skip.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from lifeos.database.repository import TaskInstanceRepository, TaskRepository
from lifeos.engine.location import filter_tasks_by_location, is_location_allowed
from lifeos.engine.ranking import sort_task_views
from lifeos.engine.streak import StreakCalculator
from lifeos.models.instance import InstanceStatus, InstanceValue, TaskInstance, TaskInstanceView
from lifeos.models.task import LocationType, Task
from lifeos.recurrence.dates import DateLike, as_date
from lifeos.recurrence.engine import occurs_on

logger = logging.getLogger(__name__)


class InstanceResolver:
    """Per-date task views and complete/skip/reset mutations."""

    def __init__(
        self,
        task_repo: TaskRepository,
        instance_repo: TaskInstanceRepository,
        streaks: StreakCalculator,
    ):
        self.task_repo = task_repo
        self.instance_repo = instance_repo
        self.streaks = streaks

    def _build_view(self, task: Task, day: date, instance: Optional[TaskInstance]) -> TaskInstanceView:
        record = instance or TaskInstance.pending(task.id, day)
        current_streak = self.streaks.current_streak_for(task, day) if task.streak_enabled else None
        return TaskInstanceView(**record.model_dump(), task=task, current_streak=current_streak)

    def resolve_for_date(self, day: DateLike, location: LocationType) -> List[TaskInstanceView]:
        """All tasks scheduled on a day and visible at a location, sorted for display."""
        day = as_date(day)
        scheduled = [task for task in self.task_repo.get_active() if occurs_on(task, day)]
        visible = filter_tasks_by_location(scheduled, location)

        instances: Dict[str, TaskInstance] = {
            instance.task_id: instance for instance in self.instance_repo.get_by_date(day)
        }
        views = [self._build_view(task, day, instances.get(task.id)) for task in visible]
        return sort_task_views(views)

    def resolve_single(self, task_id: str, day: DateLike, location: LocationType) -> Optional[TaskInstanceView]:
        """One task's view for a day, or None if missing, archived, not scheduled or hidden here."""
        day = as_date(day)
        task = self.task_repo.get(task_id)
        if task is None or task.is_archived:
            return None
        if not occurs_on(task, day):
            return None
        if not is_location_allowed(task, location):
            return None
        return self._build_view(task, day, self.instance_repo.get_by_task_and_date(task_id, day))

    def _existing_or_new(self, task_id: str, day: date) -> TaskInstance:
        if self.task_repo.get(task_id) is None:
            raise ValueError(f"Task {task_id} not found")
        existing = self.instance_repo.get_by_task_and_date(task_id, day)
        return existing or TaskInstance.pending(task_id, day)

    def complete_task(self, task_id: str, day: DateLike, value: Optional[InstanceValue] = None) -> TaskInstance:
        """Mark a task completed on a day. The stored value is only replaced when one is given."""
        day = as_date(day)
        instance = self._existing_or_new(task_id, day)
        update = {"status": InstanceStatus.COMPLETED.value, "completed_at": datetime.utcnow()}
        if value is not None:
            update["value"] = value
        instance = self.instance_repo.upsert(instance.model_copy(update=update))
        logger.info(f"Completed task {task_id} on {day.isoformat()}")
        return instance

    def skip_task(self, task_id: str, day: DateLike) -> TaskInstance:
        """Mark a task skipped on a day. Skipping carries no value or completion time."""
        day = as_date(day)
        instance = self._existing_or_new(task_id, day)
        instance = self.instance_repo.upsert(
            instance.model_copy(
                update={"status": InstanceStatus.SKIPPED.value, "completed_at": None, "value": None}
            )
        )
        logger.info(f"Skipped task {task_id} on {day.isoformat()}")
        return instance

    def reset_task(self, task_id: str, day: DateLike) -> Optional[TaskInstance]:
        """Return a stored record to pending. No-op (None) when nothing is stored."""
        day = as_date(day)
        existing = self.instance_repo.get_by_task_and_date(task_id, day)
        if existing is None:
            return None
        instance = self.instance_repo.upsert(
            existing.model_copy(
                update={"status": InstanceStatus.PENDING.value, "completed_at": None, "value": None}
            )
        )
        logger.info(f"Reset task {task_id} on {day.isoformat()}")
        return instance
