"""Tests for the task form session."""

from __future__ import annotations

import pytest

from taskform.errors import (
    CycleViolationError,
    InvalidRangeError,
    MissingFrequencyError,
    MissingTitleError,
    MissingWeekdaysError,
)
from taskform.forms import TaskFormSession
from taskform.scheduling import TimeRangeSynchronizer
from taskform.schemas.payloads import TaskPriority, TaskStatus, TaskType
from taskform.schemas.recurrence import (
    RecurrenceEndCondition,
    RecurrenceFrequency,
    RecurrencePattern,
    Weekday,
)
from taskform.tasks.models import Task, TaskFormPrefill, TimeBlock
from taskform.utils.wall_clock import to_instant


@pytest.fixture
def all_tasks() -> list[Task]:
    return [
        Task(id="home", title="Home renovation", tags=["home", "project"]),
        Task(id="paint", title="Paint kitchen", parent_id="home", tags=["home"]),
        Task(id="buy", title="Buy paint", parent_id="paint", tags=["shopping"]),
        Task(id="work", title="Work project", tags=["work", "project"]),
    ]


class TestOpening:
    def test_new_blank_form(self, all_tasks, settings):
        session = TaskFormSession.new(all_tasks=all_tasks, settings=settings)
        assert session.title == ""
        assert session.status == TaskStatus.NOT_STARTED
        assert session.priority == TaskPriority.MEDIUM
        assert session.time_range.start_instant is None
        assert session.excluded_parent_ids == set()
        assert not session.is_recurring

    def test_new_on_picked_slot_projects_default_estimate(self, settings):
        slot = to_instant("2024-01-01", "09:00")
        session = TaskFormSession.new(scheduled_time=slot, is_all_day=False, settings=settings)
        state = session.time_range.snapshot()
        assert state.duration_minutes == 60
        assert (state.end_date, state.end_time) == ("2024-01-01", "10:00")

    def test_prefill_estimate_wins_over_default(self, settings):
        slot = to_instant("2024-01-01", "09:00")
        prefill = TaskFormPrefill(time_estimate_minutes=25)
        session = TaskFormSession.new(
            scheduled_time=slot, is_all_day=False, prefill=prefill, settings=settings
        )
        assert session.time_range.end_time == "09:25"

    def test_prefill_tags_type_and_recurrence(self, settings):
        prefill = TaskFormPrefill(
            tags=["habit", "morning"],
            task_type=TaskType.HABIT,
            is_recurring=True,
            recurrence_pattern=RecurrencePattern(frequency="Weekly", interval=2),
        )
        session = TaskFormSession.new(prefill=prefill, settings=settings)
        assert session.tags_text == "habit, morning"
        assert session.task_type == TaskType.HABIT
        assert session.is_recurring
        assert session.recurrence.frequency == RecurrenceFrequency.WEEKLY
        assert session.recurrence.interval == 2

    def test_allow_recurrence_defaults_to_daily(self, settings):
        session = TaskFormSession.new(allow_recurrence=True, settings=settings)
        assert session.is_recurring
        assert session.recurrence.frequency == RecurrenceFrequency.DAILY
        assert session.recurrence.interval == 1

    def test_default_parent_fills_search(self, all_tasks, settings):
        session = TaskFormSession.new(
            all_tasks=all_tasks, default_parent_id="home", settings=settings
        )
        assert session.parent_id == "home"
        assert session.parent_search == "Home renovation"

    def test_edit_existing_task(self, all_tasks, settings):
        task = Task(
            id="paint",
            title="Paint kitchen",
            parent_id="home",
            scheduled_time=to_instant("2024-01-06", "14:00"),
            is_all_day=False,
            time_estimate_minutes=120,
            tags=["home", "diy"],
            collaborator_ids=["u1"],
            assignee_id="u1",
            priority=TaskPriority.HIGH,
        )
        session = TaskFormSession.edit(task, all_tasks=all_tasks, settings=settings)
        assert session.title == "Paint kitchen"
        assert session.parent_search == "Home renovation"
        assert session.tags_text == "home, diy"
        assert (session.time_range.end_date, session.time_range.end_time) == (
            "2024-01-06",
            "16:00",
        )
        assert session.excluded_parent_ids == {"paint", "buy"}

    def test_edit_timed_task_without_estimate(self, settings):
        task = Task(
            id="call",
            title="Call the plumber",
            scheduled_time=to_instant("2024-01-01", "09:00"),
            is_all_day=False,
        )
        session = TaskFormSession.edit(task, settings=settings)
        state = session.time_range.snapshot()
        assert (state.start_date, state.start_time) == ("2024-01-01", "09:00")
        assert (state.end_date, state.end_time) == (None, None)
        assert state.duration_minutes is None

        payload = session.submit()
        assert payload.scheduled_time == task.scheduled_time
        assert payload.is_all_day is False
        assert payload.time_estimate_minutes is None


class TestParentSelection:
    def test_candidates_skip_own_subtree(self, all_tasks, settings):
        session = TaskFormSession.edit(all_tasks[0], all_tasks=all_tasks, settings=settings)
        titles = [t.title for t in session.search_parent("p")]
        assert titles == ["Work project"]

    def test_selecting_descendant_is_a_cycle(self, all_tasks, settings):
        session = TaskFormSession.edit(all_tasks[0], all_tasks=all_tasks, settings=settings)
        with pytest.raises(CycleViolationError) as excinfo:
            session.select_parent("buy")
        assert excinfo.value.parent_id == "buy"
        assert session.parent_id is None

    def test_select_and_clear(self, all_tasks, settings):
        session = TaskFormSession.edit(all_tasks[2], all_tasks=all_tasks, settings=settings)
        session.select_parent("work")
        assert (session.parent_id, session.parent_search) == ("work", "Work project")
        session.clear_parent()
        assert (session.parent_id, session.parent_search) == (None, "")

    def test_unknown_parent_rejected(self, all_tasks, settings):
        session = TaskFormSession.new(all_tasks=all_tasks, settings=settings)
        with pytest.raises(ValueError):
            session.select_parent("missing")
        assert session.parent_id is None


class TestPeopleAndTags:
    def test_removing_assignee_unassigns(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.toggle_collaborator("u1")
        session.toggle_collaborator("u2")
        session.set_assignee("u1")
        assert session.toggle_collaborator("u1") == ["u2"]
        assert session.assignee_id is None

    def test_tag_corpus_spans_tasks_and_blocks(self, all_tasks, settings):
        blocks = [TimeBlock(id="b1", title="Gym", start_time=0, end_time=1, tags=["health"])]
        session = TaskFormSession.new(all_tasks=all_tasks, time_blocks=blocks, settings=settings)
        assert session.set_tags_text("home, h") == ["shopping", "health"]

    def test_commit_tag(self, all_tasks, settings):
        session = TaskFormSession.new(all_tasks=all_tasks, settings=settings)
        session.set_tags_text("work, pro")
        assert session.tag_suggestions() == ["project"]
        assert session.commit_tag("project") == "work, project, "
        assert session.tags == ["work", "project"]


class TestSubmit:
    def test_scheduled_task_payload(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Deep work"
        session.set_start("2024-01-01", "09:00")
        session.set_duration(90)
        session.tags_text = "focus, "
        session.toggle_collaborator("u1")
        session.set_assignee("u2")

        payload = session.submit()
        assert payload.scheduled_time == to_instant("2024-01-01", "09:00")
        assert payload.is_all_day is False
        assert payload.time_estimate_minutes == 90
        assert payload.tags == ["focus"]
        assert payload.collaborator_ids == ["u1", "u2"]
        assert payload.assignee_id == "u2"
        assert payload.recurrence_pattern is None

    def test_unscheduled_task(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Someday"
        payload = session.submit()
        assert payload.scheduled_time is None
        assert payload.is_all_day is True
        assert "scheduled_time" not in payload.to_payload()

    def test_all_day_duration_override(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Conference"
        session.time_range = TimeRangeSynchronizer("2024-01-01", duration_minutes=480)
        payload = session.submit()
        assert payload.is_all_day
        assert payload.time_estimate_minutes == 480

    @pytest.mark.parametrize("title", ["", "   "])
    def test_title_required(self, settings, title):
        session = TaskFormSession.new(settings=settings)
        session.title = title
        with pytest.raises(MissingTitleError):
            session.submit()

    def test_invalid_range_blocks_submit_and_flags(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Broken"
        session.set_start("2024-01-01", "09:00")
        with pytest.raises(InvalidRangeError):
            session.set_end("2024-01-01", "08:00")
        session.indicator.clear()

        with pytest.raises(InvalidRangeError):
            session.submit()
        assert session.indicator.active

    def test_recurrence_checked_before_schedule(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Broken"
        session.set_start("2024-01-01", "09:00")
        with pytest.raises(InvalidRangeError):
            session.set_end("2024-01-01", "08:00")
        session.set_recurring(True)
        with pytest.raises(MissingFrequencyError):
            session.submit()

    def test_weekly_without_days(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Standup"
        session.set_recurring(True)
        session.recurrence.frequency = RecurrenceFrequency.WEEKLY
        with pytest.raises(MissingWeekdaysError):
            session.submit()

    def test_recurring_payload_is_materialized(self, settings):
        session = TaskFormSession.new(settings=settings)
        session.title = "Standup"
        session.set_recurring(True)
        session.recurrence.frequency = RecurrenceFrequency.WEEKLY
        session.toggle_weekday("Wed")
        session.toggle_weekday("Mon")
        session.recurrence.end_condition = RecurrenceEndCondition.AFTER_COUNT
        session.recurrence.end_count = 10
        session.recurrence.end_date = to_instant("2024-12-31")

        pattern = session.submit().recurrence_pattern
        assert pattern.interval == 1
        assert pattern.days_of_week == [Weekday.MON, Weekday.WED]
        assert pattern.end_count == 10
        assert pattern.end_date is None
