"""Add projects and make every timer belong to one

Revision ID: 003
Revises: 002
Create Date: 2023-09-15 00:00:00.000000

Timers that predate projects are adopted by a generated "Default" project,
which also becomes the current project. Deleting a project cascades to its
timers.
"""

from collections.abc import Sequence
from uuid import uuid4

import sqlalchemy as sa

from alembic import op
from src.alembic.migration_utils import count_rows, projects_table, timers_table

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

DEFAULT_PROJECT_NAME = "Default"


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("unique_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_unique_id", "projects", ["unique_id"], unique=True)

    with op.batch_alter_table("timers") as batch_op:
        batch_op.add_column(sa.Column("project_id", sa.Integer(), nullable=True))

    if count_rows("timers"):
        op.bulk_insert(
            projects_table,
            [{"unique_id": uuid4().hex, "name": DEFAULT_PROJECT_NAME, "is_current": True}],
        )
        default_id = (
            op.get_bind()
            .execute(sa.select(sa.func.max(projects_table.c.id)))
            .scalar_one()
        )
        op.execute(
            timers_table.update()
            .where(timers_table.c.project_id.is_(None))
            .values(project_id=default_id)
        )

    with op.batch_alter_table("timers") as batch_op:
        batch_op.alter_column("project_id", existing_type=sa.Integer(), nullable=False)
        batch_op.create_foreign_key(
            "fk_timers_project_id_projects",
            "projects",
            ["project_id"],
            ["id"],
            ondelete="CASCADE",
        )
        batch_op.create_index("ix_timers_project_id_start_time", ["project_id", "start_time"])


def downgrade() -> None:
    with op.batch_alter_table("timers") as batch_op:
        batch_op.drop_index("ix_timers_project_id_start_time")
        batch_op.drop_constraint("fk_timers_project_id_projects", type_="foreignkey")
        batch_op.drop_column("project_id")

    op.drop_index("ix_projects_unique_id", table_name="projects")
    op.drop_table("projects")
