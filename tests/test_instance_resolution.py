"""Tests for per-date resolution and complete/skip/reset mutations."""

import pytest
from datetime import date

from lifeos.models.task import Task


class TestResolveForDate:
    """Test InstanceResolver.resolve_for_date()."""

    def test_synthesizes_pending_view_without_writing(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)

        views = resolver.resolve_for_date(date(2024, 1, 5), "home")

        assert len(views) == 1
        view = views[0]
        assert view.id == "task-1_2024-01-05"
        assert view.status == "pending"
        assert view.task.id == sample_task.id
        assert view.current_streak == 0
        assert instance_repo.get_by_date(date(2024, 1, 5)) == []

    def test_filters_by_recurrence_location_and_archive(self, task_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "id": "daily", "title": "Daily"}))
        task_repo.create(Task(**{
            **sample_task_base,
            "id": "monday",
            "title": "Monday",
            "recurrence": {"kind": "weekly", "days_of_week": [1], "start_date": date(2024, 1, 1)},
        }))
        task_repo.create(Task(**{
            **sample_task_base,
            "id": "office",
            "title": "Office only",
            "location_condition": {"allowed_locations": ["office"]},
        }))
        task_repo.create(Task(**{**sample_task_base, "id": "archived", "title": "Old", "is_archived": True}))

        tuesday_home = resolver.resolve_for_date(date(2024, 1, 2), "home")
        monday_office = resolver.resolve_for_date(date(2024, 1, 8), "office")

        assert [v.task_id for v in tuesday_home] == ["daily"]
        assert {v.task_id for v in monday_office} == {"daily", "monday", "office"}

    def test_uses_existing_record_and_streak(self, task_repo, resolver, sample_task, mark_completed):
        task_repo.create(sample_task)
        mark_completed(sample_task.id, date(2024, 1, 1), date(2024, 1, 2))

        view = resolver.resolve_for_date(date(2024, 1, 2), "home")[0]

        assert view.status == "completed"
        assert view.completed_at is not None
        assert view.current_streak == 2

    def test_streak_omitted_when_tracking_disabled(self, task_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "streak_enabled": False}))
        view = resolver.resolve_for_date(date(2024, 1, 2), "home")[0]
        assert view.current_streak is None

    def test_sorted_by_priority_then_title(self, task_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "id": "c", "title": "stretch", "priority": 1}))
        task_repo.create(Task(**{**sample_task_base, "id": "b", "title": "Read", "priority": 0}))
        task_repo.create(Task(**{**sample_task_base, "id": "a", "title": "meditate", "priority": 0, "importance": "low"}))
        task_repo.create(Task(**{**sample_task_base, "id": "d", "title": "Alarm", "priority": 2, "importance": "high"}))

        views = resolver.resolve_for_date(date(2024, 1, 2), "home")

        assert [v.task.title for v in views] == ["meditate", "Read", "stretch", "Alarm"]


class TestResolveSingle:
    """Test InstanceResolver.resolve_single()."""

    def test_none_when_not_applicable(self, task_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "id": "archived", "is_archived": True}))
        task_repo.create(Task(**{
            **sample_task_base,
            "id": "office",
            "location_condition": {"excluded_locations": ["home"]},
        }))

        assert resolver.resolve_single("missing", date(2024, 1, 2), "home") is None
        assert resolver.resolve_single("archived", date(2024, 1, 2), "home") is None
        assert resolver.resolve_single("office", date(2023, 12, 31), "office") is None
        assert resolver.resolve_single("office", date(2024, 1, 2), "home") is None
        assert resolver.resolve_single("office", date(2024, 1, 2), "office") is not None

    def test_matches_resolve_for_date(self, task_repo, resolver, sample_task, mark_completed):
        task_repo.create(sample_task)
        mark_completed(sample_task.id, date(2024, 1, 3))

        single = resolver.resolve_single(sample_task.id, date(2024, 1, 3), "home")
        listed = resolver.resolve_for_date(date(2024, 1, 3), "home")[0]

        assert single == listed


class TestMutations:
    """Test complete_task(), skip_task() and reset_task()."""

    def test_complete_twice_keeps_single_record(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)
        day = date(2024, 1, 3)

        first = resolver.complete_task(sample_task.id, day)
        second = resolver.complete_task(sample_task.id, day)

        records = instance_repo.get_by_task_id(sample_task.id)
        assert len(records) == 1
        assert records[0].status == "completed"
        assert records[0].id == "task-1_2024-01-03"
        assert second.completed_at >= first.completed_at

    def test_complete_keeps_value_unless_new_one_given(self, task_repo, instance_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "input_type": "counter"}))
        day = date(2024, 1, 3)

        resolver.complete_task("task-1", day, 8)
        resolver.complete_task("task-1", day)
        assert instance_repo.get_by_task_and_date("task-1", day).value == 8

        resolver.complete_task("task-1", day, 10)
        assert instance_repo.get_by_task_and_date("task-1", day).value == 10

    def test_text_value_round_trips(self, task_repo, instance_repo, resolver, sample_task_base):
        task_repo.create(Task(**{**sample_task_base, "input_type": "text"}))
        resolver.complete_task("task-1", date(2024, 1, 3), "felt great")
        assert instance_repo.get_by_task_and_date("task-1", date(2024, 1, 3)).value == "felt great"

    def test_reset_after_complete_keeps_pending_record(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)
        day = date(2024, 1, 3)
        resolver.complete_task(sample_task.id, day, 3)

        resolver.reset_task(sample_task.id, day)

        record = instance_repo.get_by_task_and_date(sample_task.id, day)
        assert record is not None
        assert record.status == "pending"
        assert record.value is None
        assert record.completed_at is None

    def test_reset_without_record_is_noop(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)
        assert resolver.reset_task(sample_task.id, date(2024, 1, 3)) is None
        assert instance_repo.get_by_task_id(sample_task.id) == []

    def test_skip_clears_completion(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)
        day = date(2024, 1, 3)
        resolver.complete_task(sample_task.id, day, 5)

        resolver.skip_task(sample_task.id, day)

        record = instance_repo.get_by_task_and_date(sample_task.id, day)
        assert record.status == "skipped"
        assert record.value is None
        assert record.completed_at is None

    def test_skipped_to_completed_directly(self, task_repo, instance_repo, resolver, sample_task):
        task_repo.create(sample_task)
        day = date(2024, 1, 3)
        resolver.skip_task(sample_task.id, day)
        resolver.complete_task(sample_task.id, day)
        assert instance_repo.get_by_task_and_date(sample_task.id, day).status == "completed"

    def test_mutating_unknown_task_raises(self, resolver):
        with pytest.raises(ValueError, match="not found"):
            resolver.complete_task("missing", date(2024, 1, 3))
        with pytest.raises(ValueError, match="not found"):
            resolver.skip_task("missing", date(2024, 1, 3))
