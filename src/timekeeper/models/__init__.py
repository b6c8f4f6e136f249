"""Model exports.

Import from here: `from src.timekeeper.models import Project, Timer`
"""

from src.timekeeper.models.project import Project
from src.timekeeper.models.timer import Timer

__all__ = [
    "Project",
    "Timer",
]
