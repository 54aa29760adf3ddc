"""FastAPI web application for lifeos.

Thin request/response layer: every route delegates to the engine or a
repository. Location defaults to the stored settings when not given.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from lifeos import __version__
from lifeos.database.daily_record_repository import DailyRecordRepository
from lifeos.database.database import get_db
from lifeos.database.finance_repository import FinanceRepository
from lifeos.database.repository import TaskInstanceRepository, TaskRepository
from lifeos.database.settings_repository import SettingsRepository
from lifeos.engine.calendar import CalendarAggregator
from lifeos.engine.resolution import InstanceResolver
from lifeos.engine.stats import StatsAggregator
from lifeos.engine.streak import StreakCalculator
from lifeos.models.calendar import CalendarDayView, StatsSummary, StreakStats
from lifeos.models.constants import STATS_LOOKBACK_DAYS
from lifeos.models.daily_record import DailyRecord
from lifeos.models.finance import FinanceEntry
from lifeos.models.instance import InstanceValue, TaskInstanceView
from lifeos.models.settings import UserSettings
from lifeos.models.task import (
    Importance,
    LocationCondition,
    LocationType,
    RecurrenceRule,
    ReminderConfig,
    Task,
    TaskInputType,
)
from lifeos.models.task_factory import create_task

logger = logging.getLogger(__name__)

app = FastAPI(
    title="lifeos API",
    description="Recurring tasks, streaks and daily tracking",
    version=__version__,
)


# Request models
class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1)
    recurrence: RecurrenceRule
    input_type: TaskInputType = TaskInputType.CHECKBOX
    reminder: Optional[ReminderConfig] = None
    location_condition: Optional[LocationCondition] = None
    streak_enabled: bool = False
    importance: Optional[Importance] = None
    priority: int = 0
    dropdown_options: Optional[List[str]] = None


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (all fields optional)."""
    title: Optional[str] = Field(None, min_length=1)
    recurrence: Optional[RecurrenceRule] = None
    input_type: Optional[TaskInputType] = None
    reminder: Optional[ReminderConfig] = None
    location_condition: Optional[LocationCondition] = None
    streak_enabled: Optional[bool] = None
    importance: Optional[Importance] = None
    priority: Optional[int] = None
    dropdown_options: Optional[List[str]] = None


class ReorderRequest(BaseModel):
    task_ids: List[str]


class CompleteRequest(BaseModel):
    value: Optional[InstanceValue] = None


class DailyRecordRequest(BaseModel):
    """Wellness fields for a day (the date comes from the path)."""
    water_intake: Optional[int] = Field(None, ge=0)
    fruit_intake: Optional[List[str]] = None
    weight: Optional[float] = Field(None, gt=0)
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    notes: Optional[str] = None
    voice_note_url: Optional[str] = None
    selfie_url: Optional[str] = None
    location: Optional[LocationType] = None


class FinanceEntryRequest(BaseModel):
    date: date
    title: str = Field(..., min_length=1)
    amount: float
    category: Optional[str] = None


class SettingsUpdateRequest(BaseModel):
    current_location: Optional[LocationType] = None
    finance_enabled: Optional[bool] = None
    default_reminder_time: Optional[str] = None
    morning_alarm_enabled: Optional[bool] = None


# Dependencies
def get_task_repo(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_instance_repo(db: Session = Depends(get_db)) -> TaskInstanceRepository:
    return TaskInstanceRepository(db)


def get_streaks(
    task_repo: TaskRepository = Depends(get_task_repo),
    instance_repo: TaskInstanceRepository = Depends(get_instance_repo),
) -> StreakCalculator:
    return StreakCalculator(task_repo, instance_repo)


def get_resolver(
    task_repo: TaskRepository = Depends(get_task_repo),
    instance_repo: TaskInstanceRepository = Depends(get_instance_repo),
    streaks: StreakCalculator = Depends(get_streaks),
) -> InstanceResolver:
    return InstanceResolver(task_repo, instance_repo, streaks)


def get_calendar(
    db: Session = Depends(get_db),
    task_repo: TaskRepository = Depends(get_task_repo),
    instance_repo: TaskInstanceRepository = Depends(get_instance_repo),
) -> CalendarAggregator:
    return CalendarAggregator(task_repo, instance_repo, DailyRecordRepository(db), FinanceRepository(db))


def get_stats(
    db: Session = Depends(get_db),
    aggregator: CalendarAggregator = Depends(get_calendar),
) -> StatsAggregator:
    return StatsAggregator(aggregator, DailyRecordRepository(db))


def resolve_location(
    location: Optional[LocationType] = None,
    db: Session = Depends(get_db),
) -> str:
    """Explicit ?location=, else the stored current location."""
    if location is not None:
        return location.value
    return SettingsRepository(db).get().current_location


def _task_or_404(task_repo: TaskRepository, task_id: str) -> Task:
    task = task_repo.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# Tasks
@app.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(body: TaskCreateRequest, task_repo: TaskRepository = Depends(get_task_repo)):
    """Create a task."""
    try:
        task = create_task(**body.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return task_repo.create(task)


@app.get("/tasks", response_model=List[Task])
def list_tasks(include_archived: bool = False, task_repo: TaskRepository = Depends(get_task_repo)):
    """List tasks ordered by priority."""
    tasks = task_repo.get_all() if include_archived else task_repo.get_active()
    return sorted(tasks, key=lambda t: (t.priority, t.title.casefold(), t.id))


@app.post("/tasks/reorder", response_model=List[Task])
def reorder_tasks(body: ReorderRequest, task_repo: TaskRepository = Depends(get_task_repo)):
    """Rewrite priorities following the given order."""
    return task_repo.reorder(body.task_ids)


@app.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str, task_repo: TaskRepository = Depends(get_task_repo)):
    return _task_or_404(task_repo, task_id)


@app.put("/tasks/{task_id}", response_model=Task)
def update_task(task_id: str, body: TaskUpdateRequest, task_repo: TaskRepository = Depends(get_task_repo)):
    """Update provided task fields."""
    task = _task_or_404(task_repo, task_id)
    changes = body.model_dump(exclude_unset=True)
    try:
        updated = Task.model_validate({**task.model_dump(), **changes})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return task_repo.update(updated)


@app.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, task_repo: TaskRepository = Depends(get_task_repo)):
    """Delete a task and its completion history."""
    if not task_repo.delete(task_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/tasks/{task_id}/archive", response_model=Task)
def archive_task(task_id: str, task_repo: TaskRepository = Depends(get_task_repo)):
    task = task_repo.archive(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.post("/tasks/{task_id}/unarchive", response_model=Task)
def unarchive_task(task_id: str, task_repo: TaskRepository = Depends(get_task_repo)):
    task = task_repo.unarchive(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.get("/tasks/{task_id}/streak", response_model=StreakStats)
def task_streak(
    task_id: str,
    up_to: Optional[date] = None,
    task_repo: TaskRepository = Depends(get_task_repo),
    streaks: StreakCalculator = Depends(get_streaks),
):
    """Streak statistics up to a day (default today)."""
    _task_or_404(task_repo, task_id)
    return streaks.streak_stats(task_id, up_to or date.today())


# Per-day resolution
@app.get("/days/{day}/tasks", response_model=List[TaskInstanceView])
def tasks_for_day(
    day: date,
    location: str = Depends(resolve_location),
    resolver: InstanceResolver = Depends(get_resolver),
):
    """Tasks scheduled on a day at the current location."""
    return resolver.resolve_for_date(day, location)


def _scheduled_view_or_404(resolver: InstanceResolver, task_id: str, day: date, location: str) -> TaskInstanceView:
    view = resolver.resolve_single(task_id, day, location)
    if view is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} is not scheduled on {day}")
    return view


@app.get("/days/{day}/tasks/{task_id}", response_model=TaskInstanceView)
def task_for_day(
    day: date,
    task_id: str,
    location: str = Depends(resolve_location),
    resolver: InstanceResolver = Depends(get_resolver),
):
    return _scheduled_view_or_404(resolver, task_id, day, location)


# Mutations are refused before any write when the task does not apply to the day.
@app.post("/days/{day}/tasks/{task_id}/complete", response_model=TaskInstanceView)
def complete_task(
    day: date,
    task_id: str,
    body: Optional[CompleteRequest] = None,
    location: str = Depends(resolve_location),
    resolver: InstanceResolver = Depends(get_resolver),
):
    """Complete a task on a day (optional value for counter/dropdown/text tasks)."""
    _scheduled_view_or_404(resolver, task_id, day, location)
    try:
        resolver.complete_task(task_id, day, body.value if body else None)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _scheduled_view_or_404(resolver, task_id, day, location)


@app.post("/days/{day}/tasks/{task_id}/skip", response_model=TaskInstanceView)
def skip_task(
    day: date,
    task_id: str,
    location: str = Depends(resolve_location),
    resolver: InstanceResolver = Depends(get_resolver),
):
    _scheduled_view_or_404(resolver, task_id, day, location)
    try:
        resolver.skip_task(task_id, day)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _scheduled_view_or_404(resolver, task_id, day, location)


@app.post("/days/{day}/tasks/{task_id}/reset", response_model=TaskInstanceView)
def reset_task(
    day: date,
    task_id: str,
    location: str = Depends(resolve_location),
    resolver: InstanceResolver = Depends(get_resolver),
):
    _scheduled_view_or_404(resolver, task_id, day, location)
    resolver.reset_task(task_id, day)
    return _scheduled_view_or_404(resolver, task_id, day, location)


# Wellness records
@app.get("/days/{day}/record", response_model=DailyRecord)
def get_daily_record(day: date, db: Session = Depends(get_db)):
    record = DailyRecordRepository(db).get_by_date(day)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No record for {day}")
    return record


@app.put("/days/{day}/record", response_model=DailyRecord)
def put_daily_record(day: date, body: DailyRecordRequest, db: Session = Depends(get_db)):
    """Create or replace the wellness record of a day."""
    record = DailyRecord(date=day, **body.model_dump())
    return DailyRecordRepository(db).upsert(record)


@app.delete("/days/{day}/record", status_code=status.HTTP_204_NO_CONTENT)
def delete_daily_record(day: date, db: Session = Depends(get_db)):
    if not DailyRecordRepository(db).delete(day):
        raise HTTPException(status_code=404, detail=f"No record for {day}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Finance
@app.post("/finance", response_model=FinanceEntry, status_code=status.HTTP_201_CREATED)
def create_finance_entry(body: FinanceEntryRequest, db: Session = Depends(get_db)):
    entry = FinanceEntry(id=str(uuid.uuid4()), **body.model_dump())
    return FinanceRepository(db).create(entry)


@app.get("/finance", response_model=List[FinanceEntry])
def list_finance_entries(start: date, end: date, db: Session = Depends(get_db)):
    return FinanceRepository(db).get_by_date_range(start, end)


@app.delete("/finance/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_finance_entry(entry_id: str, db: Session = Depends(get_db)):
    if not FinanceRepository(db).delete(entry_id):
        raise HTTPException(status_code=404, detail=f"Finance entry {entry_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Calendar
@app.get("/calendar", response_model=List[CalendarDayView])
def calendar_range(
    start: date,
    end: date,
    location: str = Depends(resolve_location),
    aggregator: CalendarAggregator = Depends(get_calendar),
):
    if start > end:
        raise HTTPException(status_code=400, detail="start must be <= end")
    return aggregator.build_range(start, end, location)


@app.get("/calendar/{year}/{month}", response_model=List[CalendarDayView])
def calendar_month(
    year: int,
    month: int,
    location: str = Depends(resolve_location),
    aggregator: CalendarAggregator = Depends(get_calendar),
):
    if month < 1 or month > 12:
        raise HTTPException(status_code=400, detail="month must be between 1 and 12")
    return aggregator.build_for_month(year, month, location)


# Statistics
@app.get("/stats", response_model=StatsSummary)
def stats(
    start: Optional[date] = None,
    end: Optional[date] = None,
    location: str = Depends(resolve_location),
    stats_aggregator: StatsAggregator = Depends(get_stats),
):
    """Perfect-day streaks, recent completion rate, water and weight trends.

    Defaults to the last 60 days ending today.
    """
    end = end or date.today()
    try:
        if start is None:
            return stats_aggregator.build_recent(end, STATS_LOOKBACK_DAYS, location)
        return stats_aggregator.build(start, end, location)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# Settings
@app.get("/settings", response_model=UserSettings)
def get_settings(db: Session = Depends(get_db)):
    return SettingsRepository(db).get()


@app.patch("/settings", response_model=UserSettings)
def update_settings(body: SettingsUpdateRequest, db: Session = Depends(get_db)):
    try:
        return SettingsRepository(db).update(**body.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
