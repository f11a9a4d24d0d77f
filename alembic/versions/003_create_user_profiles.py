"""003: create user_profiles table

Revision ID: 003
Revises: 002
Create Date: 2026-10-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE user_profiles (
            user_id         UUID            PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
            name            VARCHAR(100)    NOT NULL DEFAULT '',
            avatar_ref      VARCHAR(500),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_profiles;")
