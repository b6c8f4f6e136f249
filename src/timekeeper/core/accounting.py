"""Duration and time-zone accounting.

Pure functions only: nothing here touches the store or reads the clock.
Timestamps are UTC epoch seconds; zones are IANA names.
"""

from datetime import UTC, datetime
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict

from src.timekeeper.core.exceptions import InvalidTimezoneError

SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 60 * SECONDS_PER_MINUTE

DISPLAY_FORMAT: Final[str] = "%a, %Y-%m-%d %H:%M"
EXPORT_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Zones offered by presentation layers; any valid IANA name is accepted.
DEFAULT_TIMEZONES: Final[tuple[str, ...]] = (
    "US/Pacific",
    "US/Mountain",
    "US/Central",
    "US/Eastern",
)


class DurationParts(BaseModel):
    """A duration split into display components."""

    model_config = ConfigDict(frozen=True)

    hours: int
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return self.hours * SECONDS_PER_HOUR + self.minutes * SECONDS_PER_MINUTE + self.seconds


def load_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA zone name.

    Raises:
        InvalidTimezoneError: If the name is empty, malformed or unknown.
    """
    if not name or not name.strip():
        raise InvalidTimezoneError(name, "empty name")
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise InvalidTimezoneError(name) from e
    except (ValueError, TypeError, OSError) as e:
        # Absolute paths, ".." segments and similar are rejected by zoneinfo
        raise InvalidTimezoneError(name, str(e)) from e


def to_path_timezone(name: str) -> str:
    """Convert ``US/Pacific`` to ``US-Pacific`` so it fits in one URL segment."""
    return name.replace("/", "-")


def from_path_timezone(path_name: str) -> ZoneInfo:
    """Inverse of :func:`to_path_timezone`.

    Names that already resolve (e.g. ``Etc/GMT-5``) are used as given.
    """
    try:
        return load_timezone(path_name)
    except InvalidTimezoneError:
        return load_timezone(path_name.replace("-", "/"))


def to_zoned_datetime(epoch_seconds: int, zone: ZoneInfo | str) -> datetime:
    """Return the aware local datetime for a UTC epoch in ``zone``."""
    if isinstance(zone, str):
        zone = load_timezone(zone)
    return datetime.fromtimestamp(epoch_seconds, tz=UTC).astimezone(zone)


def to_zoned_display(
    epoch_seconds: int,
    zone: ZoneInfo | str,
    fmt: str = DISPLAY_FORMAT,
) -> str:
    """Format a UTC epoch as local time in ``zone``.

    The offset comes from the zone's rules at that instant, so daylight-saving
    transitions are handled.
    """
    return to_zoned_datetime(epoch_seconds, zone).strftime(fmt)


def decompose(duration_seconds: int) -> DurationParts:
    """Split a non-negative duration into hours, minutes and seconds.

    Raises:
        ValueError: If ``duration_seconds`` is negative.
    """
    if duration_seconds < 0:
        raise ValueError(f"Duration cannot be negative: {duration_seconds}")
    return DurationParts(
        hours=duration_seconds // SECONDS_PER_HOUR,
        minutes=(duration_seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE,
        seconds=duration_seconds % SECONDS_PER_MINUTE,
    )


def elapsed_since(start_epoch: int, now_epoch: int) -> int:
    """Provisional elapsed seconds for a running timer. Never persisted."""
    return max(0, now_epoch - start_epoch)


def format_duration(duration_seconds: int) -> str:
    """Format seconds as ``H:MM:SS``."""
    parts = decompose(duration_seconds)
    return f"{parts.hours}:{parts.minutes:02d}:{parts.seconds:02d}"
