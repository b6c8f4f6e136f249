"""Timer model."""

from sqlalchemy import CheckConstraint, Index, Integer, UniqueConstraint, text
from sqlmodel import Field, SQLModel


class Timer(SQLModel, table=True):
    """A span of tracked time owned by a project.

    ``duration`` is NULL while the timer is current and is written once,
    when it stops. ``is_current`` is stored as 0/1.
    """

    __tablename__ = "timers"
    __table_args__ = (
        UniqueConstraint("unique_id", name="uq_timers_unique_id"),
        CheckConstraint("is_current IN (0, 1)", name="ck_timers_is_current_bool"),
        Index(
            "uq_timers_single_current",
            "is_current",
            unique=True,
            sqlite_where=text("is_current = 1"),
            postgresql_where=text("is_current = 1"),
        ),
        Index("ix_timers_project_id_start_time", "project_id", "start_time"),
    )

    id: int | None = Field(default=None, primary_key=True)
    unique_id: str = Field(max_length=64)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE")
    start_time: int  # UTC epoch seconds
    is_current: bool = Field(default=True, sa_type=Integer)
    duration: int | None = Field(default=None, sa_column_kwargs={"server_default": text("0")})

    @property
    def is_running(self) -> bool:
        return bool(self.is_current)

    @property
    def stop_time(self) -> int | None:
        """Epoch at which the timer stopped, derived from the frozen duration."""
        if self.is_running or self.duration is None:
            return None
        return self.start_time + self.duration
