"""In-memory UserDirectoryProtocol implementation for tests."""

from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_admin.domain.repository import UserRecord
from src.cp_common.enums import UserRole


class InMemoryUserDirectory:
    def __init__(self, users: list[UserRecord] | None = None) -> None:
        self._users: dict[str, UserRecord] = {u.user_id: u for u in users or []}

    def add(self, user_id: str, username: str, role: UserRole = UserRole.USER) -> UserRecord:
        record = UserRecord(user_id=user_id, username=username, role=role)
        self._users[user_id] = record
        return record

    async def get_user(self, db: AsyncSession, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    async def set_role(
        self, db: AsyncSession, user_id: str, role: UserRole
    ) -> UserRecord | None:
        record = self._users.get(user_id)
        if record is None:
            return None
        self._users[user_id] = replace(record, role=role)
        return self._users[user_id]
