"""Test helper functions for common data creation patterns."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.timekeeper.models import Project, Timer
from tests.factories import ProjectFactory, TimerFactory


async def create_project(session: AsyncSession, **project_kwargs) -> Project:
    """Insert a project row directly, bypassing the service rules."""
    project = ProjectFactory.build(**project_kwargs)
    session.add(project)
    await session.commit()
    await session.refresh(project)
    return project


async def create_finished_timers(
    session: AsyncSession,
    project: Project,
    spans: list[tuple[int, int]],
) -> list[Timer]:
    """Insert finished timers for (start_time, duration) pairs."""
    timers = [
        TimerFactory.build(project_id=project.id, start_time=start, duration=duration)
        for start, duration in spans
    ]
    session.add_all(timers)
    await session.commit()
    for timer in timers:
        await session.refresh(timer)
    return timers


async def count_current(session: AsyncSession, table: str) -> int:
    """Count rows flagged current in ``projects`` or ``timers``."""
    if table not in ("projects", "timers"):
        raise ValueError(f"Unexpected table: {table}")
    result = await session.execute(text(f"SELECT COUNT(*) FROM {table} WHERE is_current = 1"))
    count = result.scalar_one()
    await session.commit()
    return count


class FakeClock:
    """Controllable stand-in for utc_epoch_now."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def set(self, now: int) -> None:
        self.now = now

    def advance(self, seconds: int) -> None:
        self.now += seconds
