"""ProfileService: display name and avatar per user.

A user reads and writes their own profile; reading someone else's is
reserved for admins. A user who never saved a profile gets an empty one.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import UserRole
from src.cp_common.errors import ProfileAccessDeniedError
from src.cp_gateway.user.profile_persistence import ProfileRepository
from src.cp_gateway.user.profile_repository import ProfileRepositoryProtocol, UserProfile
from src.cp_gateway.user.schemas import ProfileResponse


def _to_response(profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        user_id=profile.user_id, name=profile.name, avatar_ref=profile.avatar_ref
    )


class ProfileService:
    def __init__(self, repo: ProfileRepositoryProtocol | None = None) -> None:
        self._repo: ProfileRepositoryProtocol = repo or ProfileRepository()

    async def get_profile(self, db: AsyncSession, user_id: str) -> ProfileResponse:
        profile = await self._repo.get_profile(db, user_id)
        return _to_response(profile or UserProfile(user_id=user_id, name=""))

    async def save_profile(
        self, db: AsyncSession, user_id: str, name: str, avatar_ref: str | None
    ) -> ProfileResponse:
        profile = UserProfile(user_id=user_id, name=name.strip(), avatar_ref=avatar_ref)
        try:
            await self._repo.save_profile(db, profile)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return _to_response(profile)

    async def get_user_profile(
        self, db: AsyncSession, viewer_id: str, viewer_role: str, user_id: str
    ) -> ProfileResponse:
        if viewer_id != user_id and viewer_role != UserRole.ADMIN.value:
            raise ProfileAccessDeniedError()
        return await self.get_profile(db, user_id)
