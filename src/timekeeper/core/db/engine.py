"""Database engine management."""

from typing import Any

from sqlalchemy import Engine, create_engine, event, pool
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.timekeeper.core.config import get_settings

_engine: AsyncEngine | None = None


def to_sync_url(url: str) -> str:
    """Convert an async driver URL to its sync counterpart (aiosqlite -> pysqlite)."""
    return url.replace("+aiosqlite", "").replace("+asyncpg", "")


def configure_sqlite_transactions(engine: Engine, foreign_keys: bool = True) -> None:
    """Give pysqlite/aiosqlite connections real transactional semantics.

    The DBAPI's implicit BEGIN is disabled and SQLAlchemy emits
    ``BEGIN IMMEDIATE`` itself, so DDL is transactional and writers take the
    lock up front instead of failing on lock upgrade.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA foreign_keys = {'ON' if foreign_keys else 'OFF'}")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def _get_connect_args() -> dict[str, Any]:
    settings = get_settings()
    if settings.is_sqlite:
        return {"timeout": settings.database_busy_timeout_seconds}
    return {}


def create_store_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine for ``database_url`` (defaults to settings)."""
    settings = get_settings()
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        engine = create_async_engine(url, connect_args=_get_connect_args())
        configure_sqlite_transactions(engine.sync_engine)
    else:
        engine = create_async_engine(
            url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
        )
    return engine


def create_sync_engine(database_url: str, foreign_keys: bool = True) -> Engine:
    """Create a sync engine, used by Alembic."""
    url = to_sync_url(database_url)
    engine = create_engine(url, poolclass=pool.NullPool)
    if url.startswith("sqlite"):
        configure_sqlite_transactions(engine, foreign_keys=foreign_keys)
    return engine


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_store_engine()
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
