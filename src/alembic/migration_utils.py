from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# Lightweight table handles for data migrations. They name only the columns a
# revision touches, so they stay valid while the real tables change shape.
timers_table = sa.table(
    "timers",
    sa.column("id", sa.Integer),
    sa.column("start_time", sa.Integer),
    sa.column("is_current", sa.Integer),
    sa.column("duration", sa.Integer),
    sa.column("project_id", sa.Integer),
)

projects_table = sa.table(
    "projects",
    sa.column("id", sa.Integer),
    sa.column("unique_id", sa.String),
    sa.column("name", sa.String),
    sa.column("is_current", sa.Boolean),
)


def count_rows(table_name: str) -> int:
    return op.get_bind().execute(sa.text(f"SELECT COUNT(*) FROM {table_name}")).scalar_one()
