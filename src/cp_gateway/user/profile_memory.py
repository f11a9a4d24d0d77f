"""In-memory ProfileRepositoryProtocol implementation for tests."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.profile_repository import UserProfile


class InMemoryProfileRepository:
    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}

    async def get_profile(self, db: AsyncSession, user_id: str) -> UserProfile | None:
        return self._profiles.get(user_id)

    async def save_profile(self, db: AsyncSession, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile
