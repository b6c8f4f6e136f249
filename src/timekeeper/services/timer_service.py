"""Timer lifecycle service.

Starting a timer while another is running stops the running one first, in
the same transaction (auto-stop policy). At most one timer is current
system-wide; the partial unique index ``uq_timers_single_current`` backs
this up against concurrent writers.
"""

from collections.abc import Callable
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from src.timekeeper.core.accounting import load_timezone
from src.timekeeper.core.config import get_settings
from src.timekeeper.core.exceptions import (
    AlreadyFinishedError,
    NoCurrentTimerError,
    NotFoundError,
)
from src.timekeeper.core.logging import get_logger
from src.timekeeper.models import Project, Timer
from src.timekeeper.models.base import new_unique_id, utc_epoch_now
from src.timekeeper.repositories import ProjectRepository, TimerRepository
from src.timekeeper.schemas import TimerView
from src.timekeeper.services.base import unit_of_work

logger = get_logger(__name__)


class TimerService:
    """Start, stop and list timers."""

    def __init__(
        self,
        timer_repo: TimerRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
        clock: Callable[[], int] = utc_epoch_now,
    ):
        self.timer_repo = timer_repo
        self.project_repo = project_repo
        self.session = session
        self.clock = clock

    @staticmethod
    def _zone(timezone: str | None) -> ZoneInfo:
        return load_timezone(timezone or get_settings().default_timezone)

    async def _resolve_project(self, project_unique_id: str | None) -> Project:
        if project_unique_id is None:
            project = await self.project_repo.get_current()
            if project is None:
                raise NotFoundError("Current project")
            return project

        project = await self.project_repo.get_by_unique_id(project_unique_id)
        if project is None:
            raise NotFoundError("Project", project_unique_id)
        return project

    async def _finish(self, timer: Timer, now: int) -> Timer:
        duration = max(0, now - timer.start_time)
        if not await self.timer_repo.finish(timer.id, duration):
            # Another writer stopped it between our read and update
            raise NoCurrentTimerError()
        await self.session.refresh(timer)
        logger.info(
            "Timer stopped",
            timer_id=timer.unique_id,
            project_id=timer.project_id,
            start_time=timer.start_time,
            duration=duration,
        )
        return timer

    async def start_timer(
        self, project_unique_id: str | None = None, timezone: str | None = None
    ) -> TimerView:
        """Start a timer for a project, stopping any running timer first.

        Args:
            project_unique_id: Target project; defaults to the current project.
            timezone: Zone for the returned view; defaults to settings.

        Raises:
            NotFoundError: If the project (or, when omitted, a current project) is missing.
            InvariantViolationError: If a concurrent writer already holds the current slot.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "start_timer", project=project_unique_id):
            project = await self._resolve_project(project_unique_id)
            now = self.clock()

            running = await self.timer_repo.get_current()
            if running is not None:
                logger.info("Auto-stopping running timer", timer_id=running.unique_id)
                await self._finish(running, now)

            timer = await self.timer_repo.insert_running(new_unique_id(), project.id, now)
            logger.info(
                "Timer started",
                timer_id=timer.unique_id,
                project=project.unique_id,
                start_time=now,
            )
        return TimerView.from_timer(timer, zone, now)

    async def stop_current_timer(self, timezone: str | None = None) -> TimerView:
        """Stop the running timer and freeze its duration.

        Raises:
            NoCurrentTimerError: If no timer is running.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "stop_current_timer"):
            running = await self.timer_repo.get_current()
            if running is None:
                raise NoCurrentTimerError()
            now = self.clock()
            timer = await self._finish(running, now)
        return TimerView.from_timer(timer, zone, now)

    async def stop_timer(self, unique_id: str, timezone: str | None = None) -> TimerView:
        """Stop a specific timer.

        Raises:
            NotFoundError: If no timer has this id.
            AlreadyFinishedError: If the timer has already stopped.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "stop_timer", timer=unique_id):
            timer = await self.timer_repo.get_by_unique_id(unique_id)
            if timer is None:
                raise NotFoundError("Timer", unique_id)
            if not timer.is_running:
                raise AlreadyFinishedError(unique_id)
            now = self.clock()
            timer = await self._finish(timer, now)
        return TimerView.from_timer(timer, zone, now)

    async def toggle_timer(
        self, project_unique_id: str | None = None, timezone: str | None = None
    ) -> TimerView:
        """Stop the running timer if there is one, otherwise start a new one.

        Both branches run in a single transaction.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "toggle_timer", project=project_unique_id):
            running = await self.timer_repo.get_current()
            now = self.clock()
            if running is not None:
                timer = await self._finish(running, now)
            else:
                project = await self._resolve_project(project_unique_id)
                timer = await self.timer_repo.insert_running(new_unique_id(), project.id, now)
                logger.info(
                    "Timer started",
                    timer_id=timer.unique_id,
                    project=project.unique_id,
                    start_time=now,
                )
        return TimerView.from_timer(timer, zone, now)

    async def get_current_timer(self, timezone: str | None = None) -> TimerView | None:
        """Get the running timer with its provisional elapsed time."""
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "get_current_timer"):
            timer = await self.timer_repo.get_current()
        if timer is None:
            return None
        return TimerView.from_timer(timer, zone, self.clock())

    async def get_timer(self, unique_id: str, timezone: str | None = None) -> TimerView:
        """Get a timer by its unique id.

        Raises:
            NotFoundError: If no timer has this id.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "get_timer", timer=unique_id):
            timer = await self.timer_repo.get_by_unique_id(unique_id)
            if timer is None:
                raise NotFoundError("Timer", unique_id)
        return TimerView.from_timer(timer, zone, self.clock())

    async def list_by_project(
        self,
        project_unique_id: str,
        timezone: str | None = None,
        since: int | None = None,
        until: int | None = None,
    ) -> list[TimerView]:
        """List a project's timers in display order.

        Args:
            project_unique_id: Project to list
            timezone: IANA zone for display strings; defaults to settings
            since: Optional inclusive lower bound on start_time
            until: Optional exclusive upper bound on start_time

        Raises:
            NotFoundError: If the project does not exist.
            InvalidTimezoneError: If the zone is unknown.
        """
        zone = self._zone(timezone)
        async with unit_of_work(self.session, "list_by_project", project=project_unique_id):
            project = await self._resolve_project(project_unique_id)
            timers = await self.timer_repo.list_by_project(project.id, since, until)
        now = self.clock()
        return [TimerView.from_timer(timer, zone, now) for timer in timers]
