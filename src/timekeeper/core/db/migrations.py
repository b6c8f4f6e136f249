"""Reusable migration runner for both production and tests."""

import asyncio
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from alembic import command
from src.timekeeper.core.config import get_settings
from src.timekeeper.core.db.engine import create_sync_engine
from src.timekeeper.core.exceptions import MigrationError
from src.timekeeper.core.logging import get_logger

logger = get_logger(__name__)

SCRIPT_LOCATION = Path(__file__).resolve().parents[3] / "alembic"


def get_alembic_config(database_url: str | None = None) -> Config:
    """Build an Alembic config pointing at the bundled revision tree."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url or get_settings().database_url)
    return alembic_cfg


def current_revision(database_url: str | None = None) -> str | None:
    """Return the revision recorded in ``alembic_version``, or None for an empty store."""
    url = database_url or get_settings().database_url
    engine = create_sync_engine(url)
    try:
        with engine.connect() as connection:
            return MigrationContext.configure(connection).get_current_revision()
    finally:
        engine.dispose()


def head_revision() -> str | None:
    return ScriptDirectory.from_config(get_alembic_config()).get_current_head()


def run_migrations_sync(database_url: str | None = None, revision: str = "head") -> None:
    """Run Alembic migrations synchronously.

    Each revision runs in its own transaction; already-applied revisions are
    skipped via ``alembic_version``.

    Raises:
        MigrationError: If any revision fails. The failing revision is rolled back.
    """
    alembic_cfg = get_alembic_config(database_url)
    try:
        command.upgrade(alembic_cfg, revision)
    except Exception as e:
        logger.error("Migration failed", target=revision, error=str(e))
        raise MigrationError(f"Failed to migrate store to {revision}: {e}") from e
    logger.info("Migrations applied", target=revision)


async def run_migrations_async(database_url: str | None = None, revision: str = "head") -> None:
    """Run Alembic migrations from async context.

    Runs in a worker thread to avoid event loop conflicts with Alembic.
    """
    await asyncio.to_thread(run_migrations_sync, database_url, revision)
