"""Admin-side view of the users table."""

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import UserRole


@dataclass(frozen=True)
class UserRecord:
    user_id: str
    username: str
    role: UserRole


class UserDirectoryProtocol(Protocol):
    async def get_user(self, db: AsyncSession, user_id: str) -> UserRecord | None: ...

    async def set_role(
        self, db: AsyncSession, user_id: str, role: UserRole
    ) -> UserRecord | None: ...
