"""Tests for service schemas and model helpers."""

import pytest
from pydantic import ValidationError

from src.timekeeper.core.accounting import DurationParts, load_timezone
from src.timekeeper.models import Timer
from src.timekeeper.schemas import ProjectCreate, ProjectRename, TimerView

pytestmark = pytest.mark.unit


class TestProjectCreate:
    def test_name_is_stripped(self):
        assert ProjectCreate(name="  Writing  ").name == "Writing"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 201])
    def test_bad_names_rejected(self, name: str):
        with pytest.raises(ValidationError):
            ProjectCreate(name=name)

    def test_unique_id_optional(self):
        assert ProjectCreate(name="Writing").unique_id is None

    def test_blank_unique_id_rejected(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Writing", unique_id="   ")

    def test_rename_rejects_blank(self):
        with pytest.raises(ValidationError):
            ProjectRename(name=" ")


class TestTimerModel:
    def test_running_timer_has_no_stop_time(self):
        timer = Timer(unique_id="t1", project_id=1, start_time=100, is_current=True)
        assert timer.is_running
        assert timer.stop_time is None

    def test_finished_timer_stop_time(self):
        timer = Timer(unique_id="t1", project_id=1, start_time=100, is_current=False, duration=50)
        assert not timer.is_running
        assert timer.stop_time == 150

    def test_integer_flag_from_store(self):
        timer = Timer(unique_id="t1", project_id=1, start_time=100, is_current=0, duration=0)
        assert not timer.is_running
        assert timer.stop_time == 100


class TestTimerView:
    def test_finished_view(self):
        timer = Timer(
            id=1, unique_id="t1", project_id=2, start_time=1000, is_current=False, duration=90
        )
        view = TimerView.from_timer(timer, load_timezone("UTC"), now=5000)

        assert view.is_current is False
        assert view.duration == 90
        assert view.parts == DurationParts(hours=0, minutes=1, seconds=30)
        assert view.stop_time == 1090
        assert view.start_display == "Thu, 1970-01-01 00:16"
        assert view.stop_display == "Thu, 1970-01-01 00:18"
        assert view.elapsed is None
        assert view.timezone == "UTC"

    def test_running_view_has_provisional_elapsed(self):
        timer = Timer(id=1, unique_id="t1", project_id=2, start_time=1000, is_current=True)
        view = TimerView.from_timer(timer, load_timezone("UTC"), now=1042)

        assert view.is_current is True
        assert view.duration is None
        assert view.parts is None
        assert view.stop_time is None
        assert view.stop_display is None
        assert view.elapsed == 42

    def test_running_view_ignores_stored_default_duration(self):
        """A server default of 0 on a running row is not reported as a duration."""
        timer = Timer(
            id=1, unique_id="t1", project_id=2, start_time=1000, is_current=1, duration=0
        )
        view = TimerView.from_timer(timer, load_timezone("UTC"), now=1010)
        assert view.duration is None
        assert view.elapsed == 10
