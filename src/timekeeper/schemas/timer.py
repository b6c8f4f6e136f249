"""Timer schemas for service output."""

from zoneinfo import ZoneInfo

from pydantic import BaseModel

from src.timekeeper.core.accounting import (
    DurationParts,
    decompose,
    elapsed_since,
    to_zoned_display,
)
from src.timekeeper.models import Timer


class TimerRead(BaseModel):
    """Stored fields of a timer."""

    id: int
    unique_id: str
    project_id: int
    start_time: int
    is_current: bool
    duration: int | None

    model_config = {"from_attributes": True}


class TimerView(TimerRead):
    """A timer prepared for display in one time zone.

    Display strings, stop time and elapsed time are computed on read and
    never stored.
    """

    timezone: str
    start_display: str
    stop_time: int | None
    stop_display: str | None
    parts: DurationParts | None
    elapsed: int | None  # provisional seconds for a running timer

    @classmethod
    def from_timer(cls, timer: Timer, zone: ZoneInfo, now: int) -> "TimerView":
        running = timer.is_running
        stop_time = timer.stop_time
        return cls(
            id=timer.id,
            unique_id=timer.unique_id,
            project_id=timer.project_id,
            start_time=timer.start_time,
            is_current=running,
            duration=None if running else timer.duration,
            timezone=zone.key,
            start_display=to_zoned_display(timer.start_time, zone),
            stop_time=stop_time,
            stop_display=to_zoned_display(stop_time, zone) if stop_time is not None else None,
            parts=decompose(timer.duration) if not running and timer.duration is not None else None,
            elapsed=elapsed_since(timer.start_time, now) if running else None,
        )
