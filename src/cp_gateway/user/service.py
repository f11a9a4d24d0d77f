"""User service: register, login, refresh, role lookup.

Works directly on the injected AsyncSession; the router owns the
transaction (`async with db.begin()` around register).
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.enums import UserRole
from src.cp_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.cp_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.cp_gateway.auth.password import hash_password, verify_password
from src.cp_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


def initial_role(username: str) -> UserRole:
    """Every registration is a plain user, except the configured bootstrap admin."""
    if settings.BOOTSTRAP_ADMIN_USERNAME and username == settings.BOOTSTRAP_ADMIN_USERNAME:
        return UserRole.ADMIN
    return UserRole.USER


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        # The DB UNIQUE constraints are the final guard; these give clean errors
        result = await db.execute(select(UserModel).where(UserModel.username == username))
        if result.scalar_one_or_none() is not None:
            raise UsernameExistsError()

        result = await db.execute(select(UserModel).where(UserModel.email == email))
        if result.scalar_one_or_none() is not None:
            raise EmailExistsError()

        role = initial_role(username)
        user = UserModel(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            is_active=True,
        )
        db.add(user)
        await db.flush()  # assigns user.id and created_at without committing
        await db.refresh(user)

        logger.info("User registered: user=%s, role=%s", user.id, role.value)
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Return (user, access_token, refresh_token).

        Unknown username and wrong password raise the same error so usernames
        cannot be enumerated.
        """
        result = await db.execute(select(UserModel).where(UserModel.username == username))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return user, create_access_token(str(user.id)), create_refresh_token(str(user.id))

    async def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token."""
        payload = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(payload["sub"]))
