"""Project management service."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.timekeeper.core.exceptions import InvariantViolationError, NotFoundError
from src.timekeeper.core.logging import get_logger
from src.timekeeper.models import Project
from src.timekeeper.models.base import new_unique_id
from src.timekeeper.repositories import ProjectRepository
from src.timekeeper.schemas import ProjectCreate, ProjectRead, ProjectRename
from src.timekeeper.services.base import unit_of_work

logger = get_logger(__name__)


class ProjectService:
    """Create, select and delete projects.

    The first project created becomes current. Later projects start
    inactive until selected with set_current_project.
    """

    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session

    async def _get_or_raise(self, unique_id: str) -> Project:
        project = await self.project_repo.get_by_unique_id(unique_id)
        if project is None:
            raise NotFoundError("Project", unique_id)
        return project

    async def create_project(self, name: str, unique_id: str | None = None) -> ProjectRead:
        """Create a project.

        Args:
            name: Display name (stripped, 1-200 characters)
            unique_id: Optional caller-chosen identifier, e.g. an NFC tag id.
                       A fresh opaque id is generated when omitted.

        Raises:
            pydantic.ValidationError: If the name or id is empty or too long.
            InvariantViolationError: If the unique_id is already taken.
        """
        data = ProjectCreate(name=name, unique_id=unique_id)
        async with unit_of_work(self.session, "create_project", project=data.unique_id):
            if data.unique_id is not None:
                if await self.project_repo.get_by_unique_id(data.unique_id) is not None:
                    raise InvariantViolationError(
                        f"Project with unique_id '{data.unique_id}' already exists"
                    )

            is_first = await self.project_repo.count() == 0
            project = Project(
                unique_id=data.unique_id or new_unique_id(),
                name=data.name,
                is_current=is_first,
            )
            self.project_repo.add(project)
            await self.session.flush()
            await self.session.refresh(project)

            logger.info(
                "Project created",
                project=project.unique_id,
                name=project.name,
                is_current=is_first,
            )
        return ProjectRead.model_validate(project)

    async def get_project(self, unique_id: str) -> ProjectRead:
        """Get a project by unique id.

        Raises:
            NotFoundError: If no project has this id.
        """
        async with unit_of_work(self.session, "get_project", project=unique_id):
            project = await self._get_or_raise(unique_id)
        return ProjectRead.model_validate(project)

    async def get_current_project(self) -> ProjectRead | None:
        async with unit_of_work(self.session, "get_current_project"):
            project = await self.project_repo.get_current()
        return ProjectRead.model_validate(project) if project is not None else None

    async def list_projects(self) -> list[ProjectRead]:
        async with unit_of_work(self.session, "list_projects"):
            projects = await self.project_repo.list_all()
        return [ProjectRead.model_validate(p) for p in projects]

    async def set_current_project(self, unique_id: str) -> ProjectRead:
        """Make a project current, clearing the previous one in the same transaction.

        Raises:
            NotFoundError: If no project has this id.
        """
        async with unit_of_work(self.session, "set_current_project", project=unique_id):
            project = await self._get_or_raise(unique_id)
            if not project.is_current:
                cleared = await self.project_repo.clear_current()
                await self.project_repo.mark_current(project.id)
                project = await self._get_or_raise(unique_id)
                logger.info("Current project changed", project=unique_id, cleared=cleared)
        return ProjectRead.model_validate(project)

    async def rename_project(self, unique_id: str, name: str) -> ProjectRead:
        """Change a project's display name.

        Raises:
            NotFoundError: If no project has this id.
        """
        data = ProjectRename(name=name)
        async with unit_of_work(self.session, "rename_project", project=unique_id):
            project = await self._get_or_raise(unique_id)
            project.name = data.name
            await self.session.flush()
            logger.info("Project renamed", project=unique_id, name=data.name)
        return ProjectRead.model_validate(project)

    async def delete_project(self, unique_id: str) -> int:
        """Delete a project together with all of its timers.

        Returns:
            Number of timers removed with the project.

        Raises:
            NotFoundError: If no project has this id.
        """
        async with unit_of_work(self.session, "delete_project", project=unique_id):
            project = await self._get_or_raise(unique_id)
            timer_count = await self.project_repo.count_timers(project.id)
            await self.project_repo.delete(project.id)
            self.session.expunge(project)
            logger.info("Project deleted", project=unique_id, timers_deleted=timer_count)
        return timer_count
