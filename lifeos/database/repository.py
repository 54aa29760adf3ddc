"""Repository layer for tasks and their per-date instances."""

import logging
from datetime import date
from typing import List, Optional, Set

from sqlalchemy.orm import Session

from lifeos.database.store import Store, TASKS, TASK_INSTANCES
from lifeos.models.instance import TaskInstance
from lifeos.models.task import Task

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task operations."""

    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def _as_unique_ids(self, task_ids: List[str]) -> List[str]:
        """Deduplicate while preserving order."""
        seen: Set[str] = set()
        unique: List[str] = []
        for task_id in task_ids:
            if task_id not in seen:
                seen.add(task_id)
                unique.append(task_id)
        return unique

    def get_all(self) -> List[Task]:
        """Get all tasks, archived included."""
        return self.store.get_all(TASKS)

    def get_active(self) -> List[Task]:
        """Get all non-archived tasks."""
        return [task for task in self.get_all() if not task.is_archived]

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        return self.store.get(TASKS, task_id)

    def create(self, task: Task) -> Task:
        """Create a new task."""
        if self.get(task.id) is not None:
            raise ValueError(f"Task {task.id} already exists")
        self.store.put(TASKS, task)
        logger.debug(f"Created task {task.id}: {task.title[:50]}")
        return task

    def update(self, task: Task) -> Task:
        """Replace an existing task."""
        if self.get(task.id) is None:
            raise ValueError(f"Task {task.id} not found")
        self.store.put(TASKS, task)
        logger.debug(f"Updated task {task.id}: {task.title[:50]}")
        return task

    def delete(self, task_id: str) -> bool:
        """Delete a task and all of its instances."""
        if self.get(task_id) is None:
            return False
        removed = self.store.delete_by_index(TASK_INSTANCES, "by-task-id", task_id)
        self.store.delete(TASKS, task_id)
        logger.debug(f"Deleted task {task_id} and {removed} instances")
        return True

    def _set_archived(self, task_id: str, archived: bool) -> Optional[Task]:
        task = self.get(task_id)
        if task is None:
            return None
        if task.is_archived == archived:
            return task
        return self.update(task.model_copy(update={"is_archived": archived}))

    def archive(self, task_id: str) -> Optional[Task]:
        """Archive a task (hidden from resolution, history kept)."""
        return self._set_archived(task_id, True)

    def unarchive(self, task_id: str) -> Optional[Task]:
        """Unarchive a task."""
        return self._set_archived(task_id, False)

    def reorder(self, task_ids: List[str]) -> List[Task]:
        """Rewrite priorities 0..n-1 following the given order.

        Unknown ids are ignored. Tasks not listed keep their priority.
        """
        reordered: List[Task] = []
        for position, task_id in enumerate(self._as_unique_ids(task_ids)):
            task = self.get(task_id)
            if task is None:
                logger.warning(f"Skipping unknown task {task_id} in reorder")
                continue
            if task.priority != position:
                task = self.update(task.model_copy(update={"priority": position}))
            reordered.append(task)
        return reordered


class TaskInstanceRepository:
    """Repository for TaskInstance operations."""

    def __init__(self, db: Session):
        self.db = db
        self.store = Store(db)

    def get_by_date(self, day: date) -> List[TaskInstance]:
        """Get all instances recorded for a date."""
        return self.store.get_all_by_index(TASK_INSTANCES, "by-date", day)

    def get_by_task_id(self, task_id: str) -> List[TaskInstance]:
        """Get all instances recorded for a task."""
        return self.store.get_all_by_index(TASK_INSTANCES, "by-task-id", task_id)

    def get(self, instance_id: str) -> Optional[TaskInstance]:
        """Get instance by ID."""
        return self.store.get(TASK_INSTANCES, instance_id)

    def get_by_task_and_date(self, task_id: str, day: date) -> Optional[TaskInstance]:
        """Get the instance of a task on a date, or None."""
        for instance in self.get_by_date(day):
            if instance.task_id == task_id:
                return instance
        return None

    def get_by_date_range(self, start: date, end: date) -> List[TaskInstance]:
        """Get instances with start <= date <= end."""
        return self.store.get_range_by_index(TASK_INSTANCES, "by-date", start, end)

    def upsert(self, instance: TaskInstance) -> TaskInstance:
        """Create or replace an instance."""
        self.store.put(TASK_INSTANCES, instance)
        logger.debug(f"Upserted task instance {instance.id} ({instance.status})")
        return instance

    def delete(self, instance_id: str) -> bool:
        """Delete an instance."""
        return self.store.delete(TASK_INSTANCES, instance_id)

    def delete_by_task_id(self, task_id: str) -> int:
        """Delete all instances of a task."""
        return self.store.delete_by_index(TASK_INSTANCES, "by-task-id", task_id)
