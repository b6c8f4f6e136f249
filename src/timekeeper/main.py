"""Startup, shutdown and the entry point for presentation layers."""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.timekeeper.core.config import get_settings
from src.timekeeper.core.db import dispose_engine, get_session, run_migrations_async
from src.timekeeper.core.exceptions import MigrationError
from src.timekeeper.core.logging import get_logger, setup_logging
from src.timekeeper.models.base import utc_epoch_now
from src.timekeeper.repositories import ProjectRepository, TimerRepository
from src.timekeeper.services import ExportService, ProjectService, TimerService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(database_url: str | None = None) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown.

    Migrations are applied before anything else. A failed migration is
    fatal: MigrationError propagates and the application does not start.
    """
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    try:
        await run_migrations_async(database_url)
    except MigrationError:
        logger.critical("Schema migration failed, refusing to start")
        await dispose_engine()
        raise

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


@dataclass
class Timekeeper:
    """The services a presentation layer needs, sharing one session."""

    session: AsyncSession
    timers: TimerService
    projects: ProjectService
    exports: ExportService

    @classmethod
    def from_session(
        cls,
        session: AsyncSession,
        clock: Callable[[], int] = utc_epoch_now,
    ) -> "Timekeeper":
        timer_repo = TimerRepository(session)
        project_repo = ProjectRepository(session)
        return cls(
            session=session,
            timers=TimerService(timer_repo, project_repo, session, clock=clock),
            projects=ProjectService(project_repo, session),
            exports=ExportService(project_repo, timer_repo, session),
        )


@asynccontextmanager
async def open_timekeeper(
    engine: AsyncEngine | None = None,
    clock: Callable[[], int] = utc_epoch_now,
) -> AsyncGenerator[Timekeeper, None]:
    """Open a session and yield the services bound to it.

    Example:
        async with lifespan():
            async with open_timekeeper() as tk:
                project = await tk.projects.create_project("Writing")
                await tk.timers.start_timer(project.unique_id)
    """
    async with get_session(engine) as session:
        yield Timekeeper.from_session(session, clock=clock)
