"""Pydantic schemas returned by the service layer."""

from src.timekeeper.schemas.project import ProjectCreate, ProjectRead, ProjectRename
from src.timekeeper.schemas.timer import TimerRead, TimerView

__all__ = [
    "ProjectCreate",
    "ProjectRead",
    "ProjectRename",
    "TimerRead",
    "TimerView",
]
