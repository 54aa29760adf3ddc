"""Tests for the store and repository CRUD operations."""

import pytest
from datetime import date

from lifeos.database.store import Store, TASKS, TASK_INSTANCES, DAILY_RECORDS
from lifeos.models.daily_record import DailyRecord
from lifeos.models.finance import FinanceEntry
from lifeos.models.instance import TaskInstance
from lifeos.models.task import Task


class TestStore:
    """Test the generic Store contract."""

    def test_put_get_delete(self, db_session, sample_task):
        store = Store(db_session)

        assert store.put(TASKS, sample_task) == sample_task.id
        assert store.get(TASKS, sample_task.id) == sample_task
        assert store.delete(TASKS, sample_task.id) is True
        assert store.get(TASKS, sample_task.id) is None
        assert store.delete(TASKS, sample_task.id) is False

    def test_put_replaces(self, db_session, sample_task):
        store = Store(db_session)
        store.put(TASKS, sample_task)
        store.put(TASKS, sample_task.model_copy(update={"title": "Drink more water"}))

        assert len(store.get_all(TASKS)) == 1
        assert store.get(TASKS, sample_task.id).title == "Drink more water"

    def test_range_by_index_is_inclusive(self, db_session):
        store = Store(db_session)
        for day in (date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)):
            store.put(DAILY_RECORDS, DailyRecord(date=day, water_intake=1000))

        found = store.get_range_by_index(DAILY_RECORDS, "by-date", date(2024, 1, 2), date(2024, 1, 3))

        assert [record.date for record in found] == [date(2024, 1, 2), date(2024, 1, 3)]

    def test_unknown_collection_or_index(self, db_session):
        store = Store(db_session)
        with pytest.raises(ValueError, match="Unknown collection"):
            store.get_all("habits")
        with pytest.raises(ValueError, match="Unknown index"):
            store.get_all_by_index(TASKS, "by-title", "x")

    def test_clear(self, db_session, sample_task):
        store = Store(db_session)
        store.put(TASKS, sample_task)
        assert store.clear(TASKS) == 1
        assert store.get_all(TASKS) == []


class TestTaskRepository:
    """Test TaskRepository CRUD operations."""

    def test_create_and_get(self, task_repo, sample_task):
        created = task_repo.create(sample_task)
        retrieved = task_repo.get(created.id)

        assert retrieved == sample_task
        assert retrieved.recurrence.kind == "daily"
        assert retrieved.recurrence.start_date == date(2024, 1, 1)

    def test_create_duplicate_raises(self, task_repo, sample_task):
        task_repo.create(sample_task)
        with pytest.raises(ValueError, match="already exists"):
            task_repo.create(sample_task)

    def test_update_missing_raises(self, task_repo, sample_task):
        with pytest.raises(ValueError, match="not found"):
            task_repo.update(sample_task)

    def test_embedded_config_round_trips(self, task_repo, sample_task_base):
        task = Task(**{
            **sample_task_base,
            "input_type": "dropdown",
            "dropdown_options": ["Good", "Okay", "Bad"],
            "reminder": {"time": "07:30", "silent": True},
            "location_condition": {"excluded_locations": ["office", "outside"]},
            "recurrence": {"kind": "custom", "days_of_week": [0, 6], "day_of_month": 15, "start_date": date(2024, 1, 1)},
        })
        task_repo.create(task)

        stored = task_repo.get(task.id)

        assert stored.dropdown_options == ["Good", "Okay", "Bad"]
        assert stored.reminder.time == "07:30"
        assert stored.location_condition.excluded_locations == ["office", "outside"]
        assert stored.recurrence.days_of_week == [0, 6]
        assert stored.recurrence.day_of_month == 15

    def test_archive_and_unarchive(self, task_repo, sample_task):
        task_repo.create(sample_task)

        assert task_repo.archive(sample_task.id).is_archived is True
        assert task_repo.get_active() == []
        assert len(task_repo.get_all()) == 1

        assert task_repo.unarchive(sample_task.id).is_archived is False
        assert len(task_repo.get_active()) == 1
        assert task_repo.archive("missing") is None

    def test_delete_removes_instances(self, task_repo, instance_repo, sample_task, mark_completed):
        task_repo.create(sample_task)
        mark_completed(sample_task.id, date(2024, 1, 1), date(2024, 1, 2))

        assert task_repo.delete(sample_task.id) is True

        assert task_repo.get(sample_task.id) is None
        assert instance_repo.get_by_task_id(sample_task.id) == []
        assert task_repo.delete(sample_task.id) is False

    def test_raw_task_delete_cascades_to_instances(self, db_session, task_repo, instance_repo, sample_task, mark_completed):
        task_repo.create(sample_task)
        mark_completed(sample_task.id, date(2024, 1, 1))

        assert Store(db_session).delete(TASKS, sample_task.id) is True

        assert instance_repo.get_by_task_id(sample_task.id) == []

    def test_reorder(self, task_repo, sample_task_base):
        for task_id, priority in (("a", 5), ("b", 7), ("c", 9)):
            task_repo.create(Task(**{**sample_task_base, "id": task_id, "priority": priority}))

        reordered = task_repo.reorder(["c", "missing", "a", "c"])

        assert [task.id for task in reordered] == ["c", "a"]
        assert task_repo.get("c").priority == 0
        assert task_repo.get("a").priority == 2
        assert task_repo.get("b").priority == 7


class TestTaskInstanceRepository:
    """Test TaskInstanceRepository lookups."""

    def test_lookups(self, task_repo, instance_repo, sample_task, weekly_monday_task, mark_completed):
        task_repo.create(sample_task)
        task_repo.create(weekly_monday_task)
        mark_completed(sample_task.id, date(2024, 1, 1), date(2024, 1, 2))
        mark_completed(weekly_monday_task.id, date(2024, 1, 1))

        assert len(instance_repo.get_by_date(date(2024, 1, 1))) == 2
        assert len(instance_repo.get_by_task_id(sample_task.id)) == 2
        assert instance_repo.get("task-1_2024-01-02").status == "completed"
        assert instance_repo.get_by_task_and_date(weekly_monday_task.id, date(2024, 1, 2)) is None
        assert len(instance_repo.get_by_date_range(date(2024, 1, 2), date(2024, 1, 5))) == 1

    def test_value_types_round_trip(self, task_repo, instance_repo, sample_task):
        task_repo.create(sample_task)
        for day, value in ((date(2024, 1, 1), 3), (date(2024, 1, 2), 2.5), (date(2024, 1, 3), "Okay")):
            instance_repo.upsert(TaskInstance(
                id=f"task-1_{day.isoformat()}", task_id="task-1", date=day, status="completed", value=value,
            ))

        values = [instance.value for instance in instance_repo.get_by_task_id("task-1")]

        assert values == [3, 2.5, "Okay"]

    def test_delete_by_task_id(self, task_repo, instance_repo, sample_task, mark_completed):
        task_repo.create(sample_task)
        mark_completed(sample_task.id, date(2024, 1, 1), date(2024, 1, 2))

        assert instance_repo.delete_by_task_id(sample_task.id) == 2
        assert instance_repo.get_by_task_id(sample_task.id) == []
        assert task_repo.get(sample_task.id) is not None


class TestDailyRecordAndFinanceRepositories:
    def test_daily_record_upsert(self, daily_record_repo):
        daily_record_repo.upsert(DailyRecord(date=date(2024, 1, 1), water_intake=1500, fruit_intake=["apple"]))
        daily_record_repo.upsert(DailyRecord(date=date(2024, 1, 1), water_intake=2000))

        record = daily_record_repo.get_by_date(date(2024, 1, 1))

        assert record.water_intake == 2000
        assert record.fruit_intake is None
        assert daily_record_repo.exists(date(2024, 1, 1)) is True
        assert daily_record_repo.delete(date(2024, 1, 1)) is True
        assert daily_record_repo.exists(date(2024, 1, 1)) is False

    def test_finance_totals(self, finance_repo):
        finance_repo.create(FinanceEntry(id="f1", date=date(2024, 1, 1), title="Salary", amount=1000.0))
        finance_repo.create(FinanceEntry(id="f2", date=date(2024, 1, 1), title="Rent", amount=-600.0))
        finance_repo.create(FinanceEntry(id="f3", date=date(2024, 1, 3), title="Coffee", amount=-4.5))

        assert finance_repo.total_for_date(date(2024, 1, 1)) == 400.0
        assert finance_repo.total_for_date_range(date(2024, 1, 1), date(2024, 1, 3)) == 395.5
        assert finance_repo.get_by_date(date(2024, 1, 2)) == []
        with pytest.raises(ValueError, match="already exists"):
            finance_repo.create(FinanceEntry(id="f1", date=date(2024, 1, 1), title="Salary", amount=1.0))


class TestSettingsRepository:
    def test_defaults_without_row(self, settings_repo):
        settings = settings_repo.get()
        assert settings.current_location == "home"
        assert settings.finance_enabled is False
        assert settings.default_reminder_time == "09:00"

    def test_updates_persist(self, settings_repo):
        settings_repo.update_location("office")
        settings_repo.toggle_finance()
        settings_repo.update_default_reminder_time("06:45")

        settings = settings_repo.get()

        assert settings.current_location == "office"
        assert settings.finance_enabled is True
        assert settings.default_reminder_time == "06:45"
        assert settings.morning_alarm_enabled is False

    def test_invalid_location_rejected(self, settings_repo):
        with pytest.raises(ValueError):
            settings_repo.update_location("mars")

    def test_reset(self, settings_repo):
        settings_repo.toggle_morning_alarm()
        assert settings_repo.reset().morning_alarm_enabled is False
        assert settings_repo.get().morning_alarm_enabled is False
