"""Initial timers table

Revision ID: 001
Revises:
Create Date: 2023-09-01 04:37:01.000000

Free-standing timers keyed by a numeric tag id, with an explicit end time.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "timers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("unique_id", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Integer(), nullable=False),  # Unix epoch of timer start
        sa.Column("end_time", sa.Integer(), nullable=True),  # Unix epoch of timer stop
        sa.Column("is_current", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("timers")
