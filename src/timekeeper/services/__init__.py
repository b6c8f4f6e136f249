"""Service layer - transactions and business rules."""

from src.timekeeper.services.export_service import ExportService, export_filename
from src.timekeeper.services.project_service import ProjectService
from src.timekeeper.services.timer_service import TimerService

__all__ = [
    "ExportService",
    "ProjectService",
    "TimerService",
    "export_filename",
]
