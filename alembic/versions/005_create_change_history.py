"""005: create change_history table (append-only)

Revision ID: 005
Revises: 004
Create Date: 2026-10-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE change_history (
            id              BIGSERIAL       PRIMARY KEY,
            user_id         VARCHAR(64)     NOT NULL,
            action          VARCHAR(20)     NOT NULL,
            card_ids        BIGINT[]        NOT NULL DEFAULT '{}',
            summary         TEXT            NOT NULL,
            details         JSONB           NOT NULL DEFAULT '{}'::jsonb,
            created_at      TIMESTAMPTZ     NOT NULL,
            CONSTRAINT ck_change_history_action CHECK (action IN (
                'addCard', 'editCard', 'deleteCard', 'updateSalePrice',
                'markSold', 'trade', 'revertTrade'))
        );
    """)
    # Serves the page query: newest first, insertion order within one timestamp
    op.execute(
        "CREATE INDEX idx_change_history_user_time "
        "ON change_history (user_id, created_at DESC, id ASC);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS change_history;")
