"""PostgreSQL ProfileRepository: raw SQL via text(); caller commits."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.profile_repository import UserProfile

_GET_SQL = text("""
    SELECT user_id, name, avatar_ref
    FROM user_profiles
    WHERE user_id = :user_id
""")

_UPSERT_SQL = text("""
    INSERT INTO user_profiles (user_id, name, avatar_ref, updated_at)
    VALUES (:user_id, :name, :avatar_ref, NOW())
    ON CONFLICT (user_id) DO UPDATE
    SET name = EXCLUDED.name,
        avatar_ref = EXCLUDED.avatar_ref,
        updated_at = NOW()
""")


class ProfileRepository:
    async def get_profile(self, db: AsyncSession, user_id: str) -> UserProfile | None:
        row = (await db.execute(_GET_SQL, {"user_id": user_id})).fetchone()
        if row is None:
            return None
        return UserProfile(user_id=str(row.user_id), name=row.name, avatar_ref=row.avatar_ref)

    async def save_profile(self, db: AsyncSession, profile: UserProfile) -> None:
        await db.execute(
            _UPSERT_SQL,
            {
                "user_id": profile.user_id,
                "name": profile.name,
                "avatar_ref": profile.avatar_ref,
            },
        )
