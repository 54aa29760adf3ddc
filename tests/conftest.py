"""Pytest fixtures and configuration for lifeos tests."""

import pytest
from datetime import date, datetime
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from lifeos.database.database import Base
from lifeos.database import models  # noqa: F401
from lifeos.database.daily_record_repository import DailyRecordRepository
from lifeos.database.finance_repository import FinanceRepository
from lifeos.database.repository import TaskInstanceRepository, TaskRepository
from lifeos.database.settings_repository import SettingsRepository
from lifeos.engine.calendar import CalendarAggregator
from lifeos.engine.resolution import InstanceResolver
from lifeos.engine.streak import StreakCalculator
from lifeos.models.task import Task


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repo(db_session: Session):
    return TaskRepository(db_session)


@pytest.fixture
def instance_repo(db_session: Session):
    return TaskInstanceRepository(db_session)


@pytest.fixture
def daily_record_repo(db_session: Session):
    return DailyRecordRepository(db_session)


@pytest.fixture
def finance_repo(db_session: Session):
    return FinanceRepository(db_session)


@pytest.fixture
def settings_repo(db_session: Session):
    return SettingsRepository(db_session)


@pytest.fixture
def streaks(task_repo, instance_repo):
    return StreakCalculator(task_repo, instance_repo)


@pytest.fixture
def resolver(task_repo, instance_repo, streaks):
    return InstanceResolver(task_repo, instance_repo, streaks)


@pytest.fixture
def aggregator(task_repo, instance_repo, daily_record_repo, finance_repo):
    return CalendarAggregator(task_repo, instance_repo, daily_record_repo, finance_repo)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    The default rule is daily from 2024-01-01 (a Monday).
    """
    return {
        "id": "task-1",
        "title": "Drink water",
        "input_type": "checkbox",
        "recurrence": {"kind": "daily", "start_date": date(2024, 1, 1)},
        "reminder": None,
        "location_condition": None,
        "streak_enabled": True,
        "importance": None,
        "priority": 0,
        "is_archived": False,
        "created_at": datetime(2024, 1, 1, 8, 0, 0),
        "dropdown_options": None,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def weekly_monday_task(sample_task_base):
    """Weekly task on Mondays only, starting Monday 2024-01-01."""
    return Task(**{
        **sample_task_base,
        "id": "task-monday",
        "title": "Weekly review",
        "recurrence": {"kind": "weekly", "days_of_week": [1], "start_date": date(2024, 1, 1)},
    })


@pytest.fixture
def mark_completed(instance_repo):
    """Store completed records for a task on the given days."""
    from lifeos.models.instance import TaskInstance

    def _mark(task_id, *days, status="completed"):
        for day in days:
            instance_repo.upsert(
                TaskInstance(
                    id=f"{task_id}_{day.isoformat()}",
                    task_id=task_id,
                    date=day,
                    status=status,
                    completed_at=datetime(day.year, day.month, day.day, 20, 0) if status == "completed" else None,
                )
            )
    return _mark


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from lifeos.api.app import app
    from lifeos.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
