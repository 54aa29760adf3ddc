"""Streak calculation for lifeos.

Only occurrence days count: a day on which the task is not scheduled
neither breaks nor extends a streak.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from lifeos.database.repository import TaskInstanceRepository, TaskRepository
from lifeos.models.calendar import StreakStats
from lifeos.models.instance import InstanceStatus, TaskInstance
from lifeos.models.task import Task
from lifeos.recurrence.dates import DateLike, as_date
from lifeos.recurrence.engine import next_occurrence_after, occurrence_dates_in_range, occurs_on


def is_completed(instance: Optional[TaskInstance]) -> bool:
    return instance is not None and instance.status == InstanceStatus.COMPLETED


def is_streak_broken_on(task: Task, day: date, instance: Optional[TaskInstance]) -> bool:
    """Streak-break rule for an already loaded task and record.

    Broken only on occurrence days of streak-tracked tasks without a completed record.
    """
    if not task.streak_enabled:
        return False
    if not occurs_on(task, day):
        return False
    return not is_completed(instance)


def longest_run(task: Task, completed_dates: List[date]) -> int:
    """Longest run of completions on consecutive occurrence days."""
    longest = 0
    current = 0
    last: Optional[date] = None

    for day in sorted(set(completed_dates)):
        # Completions on non-occurrence days are inconsistent data; ignore them.
        if not occurs_on(task, day):
            continue
        if last is not None and next_occurrence_after(task, last) == day:
            current += 1
        else:
            longest = max(longest, current)
            current = 1
        last = day

    return max(longest, current)


class StreakCalculator:
    """Streak queries over stored tasks and completion records."""

    def __init__(self, task_repo: TaskRepository, instance_repo: TaskInstanceRepository):
        self.task_repo = task_repo
        self.instance_repo = instance_repo

    def _completed_by_date(self, task_id: str) -> Dict[date, TaskInstance]:
        return {
            instance.date: instance
            for instance in self.instance_repo.get_by_task_id(task_id)
            if is_completed(instance)
        }

    def _walk_back(self, task: Task, up_to: date, completed: Dict[date, TaskInstance]) -> int:
        streak = 0
        cur = up_to
        while cur >= task.recurrence.start_date:
            if occurs_on(task, cur):
                if cur not in completed:
                    break
                streak += 1
            cur = cur - timedelta(days=1)
        return streak

    def current_streak(self, task_id: str, up_to: DateLike) -> int:
        """Consecutive completed occurrences ending at up_to (walking backward)."""
        task = self.task_repo.get(task_id)
        if task is None:
            return 0
        return self.current_streak_for(task, up_to)

    def current_streak_for(self, task: Task, up_to: DateLike) -> int:
        """current_streak for a task that is already loaded."""
        if not task.streak_enabled:
            return 0
        return self._walk_back(task, as_date(up_to), self._completed_by_date(task.id))

    def is_streak_broken(self, task_id: str, day: DateLike) -> bool:
        """True if the task was due on day and is not completed."""
        task = self.task_repo.get(task_id)
        if task is None:
            return False
        day = as_date(day)
        return is_streak_broken_on(task, day, self.instance_repo.get_by_task_and_date(task_id, day))

    def longest_streak(self, task_id: str) -> int:
        """Longest streak ever achieved, in occurrence terms."""
        task = self.task_repo.get(task_id)
        if task is None or not task.streak_enabled:
            return 0
        return longest_run(task, list(self._completed_by_date(task_id)))

    def streak_stats(self, task_id: str, up_to: DateLike) -> StreakStats:
        """Current/longest streak plus completion rate up to a day.

        Only completions on occurrence days between the start date and up_to
        are counted, so the rate stays within 0..100.
        """
        task = self.task_repo.get(task_id)
        if task is None:
            return StreakStats()

        up_to = as_date(up_to)
        completed = self._completed_by_date(task_id)
        occurrences = occurrence_dates_in_range(task, task.recurrence.start_date, up_to)
        total_completions = sum(1 for day in occurrences if day in completed)
        total_occurrences = len(occurrences)
        rate = (total_completions / total_occurrences) * 100 if total_occurrences > 0 else 0.0

        if task.streak_enabled:
            current = self._walk_back(task, up_to, completed)
            longest = longest_run(task, list(completed))
        else:
            current = 0
            longest = 0

        return StreakStats(
            current_streak=current,
            longest_streak=longest,
            total_completions=total_completions,
            total_occurrences=total_occurrences,
            completion_rate=rate,
        )
