"""Replace timers.end_time with timers.duration

Revision ID: 002
Revises: 001
Create Date: 2023-09-08 00:00:00.000000

Finished timers keep their elapsed time: duration is backfilled from
end_time - start_time before end_time is dropped. Running timers get NULL.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    with op.batch_alter_table("timers") as batch_op:
        batch_op.add_column(
            sa.Column("duration", sa.Integer(), nullable=True, server_default=sa.text("0"))
        )

    op.execute(
        """
        UPDATE timers SET duration = CASE
            WHEN end_time IS NULL THEN NULL
            WHEN end_time < start_time THEN 0
            ELSE end_time - start_time
        END
        """
    )

    with op.batch_alter_table("timers") as batch_op:
        batch_op.drop_column("end_time")


def downgrade() -> None:
    with op.batch_alter_table("timers") as batch_op:
        batch_op.add_column(sa.Column("end_time", sa.Integer(), nullable=True))

    op.execute(
        "UPDATE timers SET end_time = start_time + duration WHERE duration IS NOT NULL"
    )

    with op.batch_alter_table("timers") as batch_op:
        batch_op.drop_column("duration")
