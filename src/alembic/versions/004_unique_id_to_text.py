"""Store timers.unique_id as opaque text

Revision ID: 004
Revises: 003
Create Date: 2023-09-22 00:00:00.000000

Existing numeric ids are cast, not regenerated. Legacy rows shared the tag
id, so every duplicate after the first gets a "-<id>" suffix before the
unique constraint is added.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "004"
down_revision: str | None = "003"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    with op.batch_alter_table("timers") as batch_op:
        batch_op.alter_column(
            "unique_id",
            existing_type=sa.Integer(),
            type_=sa.String(length=64),
            existing_nullable=False,
            postgresql_using="unique_id::text",
        )

    op.execute(
        """
        UPDATE timers SET unique_id = unique_id || '-' || CAST(id AS VARCHAR)
        WHERE id NOT IN (SELECT MIN(id) FROM timers GROUP BY unique_id)
        """
    )

    with op.batch_alter_table("timers") as batch_op:
        batch_op.create_unique_constraint("uq_timers_unique_id", ["unique_id"])


def downgrade() -> None:
    # Text ids cannot be narrowed back to integers without losing data
    raise NotImplementedError("Downgrading timers.unique_id to INTEGER is not supported")
