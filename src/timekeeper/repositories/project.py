"""Repository for Project entity."""

from sqlalchemy import delete, func, update
from sqlmodel import select

from src.timekeeper.models import Project, Timer
from src.timekeeper.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List all projects in creation order."""
        result = await self.session.execute(select(Project).order_by(Project.id))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Project))
        return result.scalar_one()

    async def get_current(self) -> Project | None:
        """Get the project new timers default to."""
        result = await self.session.execute(
            select(Project)
            .where(Project.is_current == True)  # noqa: E712
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def clear_current(self) -> int:
        """Unset the current flag wherever it is set. Returns rows changed."""
        result = await self.session.execute(
            update(Project)
            .where(Project.is_current == True)  # noqa: E712
            .values(is_current=False)
        )
        return result.rowcount

    async def mark_current(self, project_id: int) -> None:
        await self.session.execute(
            update(Project).where(Project.id == project_id).values(is_current=True)
        )

    async def count_timers(self, project_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Timer).where(Timer.project_id == project_id)
        )
        return result.scalar_one()

    async def delete(self, project_id: int) -> None:
        """Delete a project row. Its timers go with it (ON DELETE CASCADE)."""
        await self.session.execute(
            delete(Project).where(Project.id == project_id),
            execution_options={"synchronize_session": False},
        )
