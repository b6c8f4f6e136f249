"""Repository for Timer entity."""

from sqlalchemy import insert, update
from sqlmodel import select

from src.timekeeper.models import Timer
from src.timekeeper.repositories.base import BaseRepository


class TimerRepository(BaseRepository[Timer]):
    """Repository for Timer entity."""

    model = Timer

    async def get_current(self) -> Timer | None:
        """Get the running timer, if any, across all projects."""
        result = await self.session.execute(
            select(Timer)
            .where(Timer.is_current == 1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def insert_running(self, unique_id: str, project_id: int, start_time: int) -> Timer:
        """Insert a current timer with an explicit NULL duration.

        Core insert is used because the ORM would omit a None column and let
        the server default (0) apply.
        """
        await self.session.execute(
            insert(Timer).values(
                unique_id=unique_id,
                project_id=project_id,
                start_time=start_time,
                is_current=1,
                duration=None,
            )
        )
        timer = await self.get_by_unique_id(unique_id)
        if timer is None:
            raise RuntimeError(f"Inserted timer {unique_id} could not be read back")
        return timer

    async def finish(self, timer_id: int, duration: int) -> bool:
        """Freeze a running timer's duration.

        The update only matches while the row is still current, so a second
        call changes nothing. Returns True when the row was updated.
        """
        result = await self.session.execute(
            update(Timer)
            .where(Timer.id == timer_id, Timer.is_current == 1)
            .values(is_current=0, duration=duration),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount == 1

    async def list_by_project(
        self,
        project_id: int,
        since: int | None = None,
        until: int | None = None,
    ) -> list[Timer]:
        """List a project's timers by ascending start time.

        Args:
            project_id: Owning project's primary key
            since: Optional inclusive lower bound on start_time (epoch seconds)
            until: Optional exclusive upper bound on start_time (epoch seconds)
        """
        query = select(Timer).where(Timer.project_id == project_id)
        if since is not None:
            query = query.where(Timer.start_time >= since)
        if until is not None:
            query = query.where(Timer.start_time < until)
        query = query.order_by(Timer.start_time, Timer.id).execution_options(
            populate_existing=True
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
