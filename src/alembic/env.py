import os
from logging.config import fileConfig

from sqlalchemy import text
from sqlmodel import SQLModel

from alembic import context
from src.timekeeper.core.config import get_settings
from src.timekeeper.core.db.engine import create_sync_engine, to_sync_url

# Import all models for metadata
from src.timekeeper.models import Project, Timer  # noqa: F401

config = context.config

if config.config_file_name is not None and os.path.exists(config.config_file_name):
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def get_url() -> str:
    """Get sync database URL, preferring an explicit sqlalchemy.url option."""
    url = config.get_main_option("sqlalchemy.url") or get_settings().database_url
    return to_sync_url(url)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def check_foreign_keys(connection) -> None:
    """Fail the run if a revision left rows pointing at missing parents."""
    violations = connection.execute(text("PRAGMA foreign_key_check")).fetchall()
    if violations:
        raise RuntimeError(f"Foreign key violations after migration: {violations}")


def do_run_migrations(connection) -> None:
    is_sqlite = connection.dialect.name == "sqlite"
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=is_sqlite,
        transactional_ddl=True if is_sqlite else None,
        transaction_per_migration=True,
    )

    with context.begin_transaction():
        context.run_migrations()

    if is_sqlite:
        check_foreign_keys(connection)


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with sync engine."""
    # Table rebuilds on SQLite must not trigger cascades on the copied rows
    connectable = create_sync_engine(get_url(), foreign_keys=False)

    with connectable.connect() as connection:
        do_run_migrations(connection)

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
