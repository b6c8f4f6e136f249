"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, TimerFactory
"""

from tests.factories.base import BaseFactory, generate_unique_id
from tests.factories.project import ProjectFactory
from tests.factories.timer import TimerFactory

__all__ = [
    "BaseFactory",
    "generate_unique_id",
    "ProjectFactory",
    "TimerFactory",
]
