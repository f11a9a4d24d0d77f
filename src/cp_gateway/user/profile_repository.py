"""UserProfile value and its repository Protocol."""

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class UserProfile:
    user_id: str
    name: str
    avatar_ref: str | None = None


class ProfileRepositoryProtocol(Protocol):
    async def get_profile(self, db: AsyncSession, user_id: str) -> UserProfile | None: ...

    async def save_profile(self, db: AsyncSession, profile: UserProfile) -> None: ...
