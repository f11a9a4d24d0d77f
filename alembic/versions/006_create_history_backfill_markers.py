"""006: create history_backfill_markers table

Revision ID: 006
Revises: 005
Create Date: 2026-10-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE history_backfill_markers (
            user_id         VARCHAR(64)     PRIMARY KEY,
            backfilled_at   TIMESTAMPTZ     NOT NULL
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS history_backfill_markers;")
