"""PostgreSQL UserDirectory: raw SQL on the users table; caller commits."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_admin.domain.repository import UserRecord
from src.cp_common.enums import UserRole

_GET_USER_SQL = text("SELECT id, username, role FROM users WHERE id = CAST(:user_id AS UUID)")

_SET_ROLE_SQL = text("""
    UPDATE users
    SET role = :role, updated_at = NOW()
    WHERE id = CAST(:user_id AS UUID)
    RETURNING id, username, role
""")


def _row_to_record(row: Any) -> UserRecord:
    return UserRecord(user_id=str(row.id), username=row.username, role=UserRole(row.role))


class UserDirectory:
    async def get_user(self, db: AsyncSession, user_id: str) -> UserRecord | None:
        row = (await db.execute(_GET_USER_SQL, {"user_id": user_id})).fetchone()
        return _row_to_record(row) if row is not None else None

    async def set_role(
        self, db: AsyncSession, user_id: str, role: UserRole
    ) -> UserRecord | None:
        row = (
            await db.execute(_SET_ROLE_SQL, {"user_id": user_id, "role": role.value})
        ).fetchone()
        return _row_to_record(row) if row is not None else None
