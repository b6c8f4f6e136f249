"""Repository layer - data access abstraction."""

from src.timekeeper.repositories.base import BaseRepository
from src.timekeeper.repositories.project import ProjectRepository
from src.timekeeper.repositories.timer import TimerRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "TimerRepository",
]
