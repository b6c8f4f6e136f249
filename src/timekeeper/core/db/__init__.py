"""Database utilities - engine, session, migrations."""

from src.timekeeper.core.db.engine import (
    create_store_engine,
    create_sync_engine,
    dispose_engine,
    get_engine,
)
from src.timekeeper.core.db.migrations import (
    current_revision,
    head_revision,
    run_migrations_async,
    run_migrations_sync,
)
from src.timekeeper.core.db.session import get_session

__all__ = [
    # Engine
    "create_store_engine",
    "create_sync_engine",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    # Migrations
    "current_revision",
    "head_revision",
    "run_migrations_async",
    "run_migrations_sync",
]
