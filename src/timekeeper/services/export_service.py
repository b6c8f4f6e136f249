"""CSV export of a project's timers."""

import csv
import io
from typing import Final

from sqlalchemy.ext.asyncio import AsyncSession

from src.timekeeper.core.accounting import EXPORT_FORMAT, load_timezone, to_zoned_display
from src.timekeeper.core.config import get_settings
from src.timekeeper.core.exceptions import NotFoundError
from src.timekeeper.core.logging import get_logger
from src.timekeeper.models import Timer
from src.timekeeper.repositories import ProjectRepository, TimerRepository
from src.timekeeper.services.base import unit_of_work

logger = get_logger(__name__)

EXPORT_COLUMNS: Final[tuple[str, ...]] = ("start_time", "end_time", "duration_seconds")


def export_filename(project_name: str) -> str:
    """Download file name for a project export."""
    safe = "".join(c if c.isalnum() or c in "-_ " else "_" for c in project_name).strip()
    return f"{safe or 'project'}.csv"


class ExportService:
    """Serialize timers to CSV.

    The export is a snapshot: a running timer is written with empty end and
    duration fields instead of a provisional value.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        timer_repo: TimerRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.timer_repo = timer_repo
        self.session = session

    @staticmethod
    def _row(timer: Timer, zone) -> dict[str, str]:
        stop_time = timer.stop_time
        return {
            "start_time": to_zoned_display(timer.start_time, zone, EXPORT_FORMAT),
            "end_time": "" if stop_time is None else to_zoned_display(stop_time, zone, EXPORT_FORMAT),
            "duration_seconds": "" if timer.is_running else str(timer.duration or 0),
        }

    async def export_project(self, project_unique_id: str, timezone: str | None = None) -> bytes:
        """Export a project's timers as UTF-8 CSV, ordered by start time.

        Raises:
            NotFoundError: If the project does not exist.
            InvalidTimezoneError: If the zone is unknown.
        """
        zone = load_timezone(timezone or get_settings().default_timezone)
        async with unit_of_work(self.session, "export_project", project=project_unique_id):
            project = await self.project_repo.get_by_unique_id(project_unique_id)
            if project is None:
                raise NotFoundError("Project", project_unique_id)
            timers = await self.timer_repo.list_by_project(project.id)

        buffer = io.StringIO(newline="")
        writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for timer in timers:
            writer.writerow(self._row(timer, zone))

        logger.info("Project exported", project=project_unique_id, rows=len(timers))
        return buffer.getvalue().encode("utf-8")
