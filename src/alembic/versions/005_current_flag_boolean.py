"""Restrict current flags to {0, 1} and allow a single current row

Revision ID: 005
Revises: 004
Create Date: 2023-10-01 00:00:00.000000

Any non-zero timers.is_current becomes 1. When several timers are current,
all but the latest-started one are stopped at the start of the next current
timer, matching what starting a new timer does today. Partial unique indexes
then keep at most one current timer and one current project.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op
from src.alembic.migration_utils import projects_table, timers_table

revision: str = "005"
down_revision: str | None = "004"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _stop_superseded_timers() -> None:
    bind = op.get_bind()
    current = bind.execute(
        sa.select(timers_table.c.id, timers_table.c.start_time)
        .where(timers_table.c.is_current == 1)
        .order_by(timers_table.c.start_time, timers_table.c.id)
    ).all()

    for (timer_id, start_time), (_, next_start) in zip(current, current[1:], strict=False):
        bind.execute(
            timers_table.update()
            .where(timers_table.c.id == timer_id)
            .values(is_current=0, duration=max(0, next_start - start_time))
        )


def _keep_latest_current_project() -> None:
    bind = op.get_bind()
    current_ids = (
        bind.execute(
            sa.select(projects_table.c.id)
            .where(projects_table.c.is_current == sa.true())
            .order_by(projects_table.c.id)
        )
        .scalars()
        .all()
    )
    if len(current_ids) > 1:
        bind.execute(
            projects_table.update()
            .where(projects_table.c.id.in_(current_ids[:-1]))
            .values(is_current=False)
        )


def upgrade() -> None:
    op.execute("UPDATE timers SET is_current = 1 WHERE is_current NOT IN (0, 1)")
    _stop_superseded_timers()
    _keep_latest_current_project()

    with op.batch_alter_table("timers") as batch_op:
        batch_op.create_check_constraint("ck_timers_is_current_bool", "is_current IN (0, 1)")

    op.create_index(
        "uq_timers_single_current",
        "timers",
        ["is_current"],
        unique=True,
        sqlite_where=sa.text("is_current = 1"),
        postgresql_where=sa.text("is_current = 1"),
    )
    op.create_index(
        "uq_projects_single_current",
        "projects",
        ["is_current"],
        unique=True,
        sqlite_where=sa.text("is_current = 1"),
        postgresql_where=sa.text("is_current"),
    )


def downgrade() -> None:
    op.drop_index("uq_projects_single_current", table_name="projects")
    op.drop_index("uq_timers_single_current", table_name="timers")

    with op.batch_alter_table("timers") as batch_op:
        batch_op.drop_constraint("ck_timers_is_current_bool", type_="check")
