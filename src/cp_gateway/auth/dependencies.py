"""FastAPI auth dependencies.

    get_current_user  any authenticated, active account (guests included)
    require_user      role user or admin; everything that reads or writes cards
    require_admin     role admin; cross-user operations

Usage:
    @router.get("/cards")
    async def list_cards(user: Annotated[UserModel, Depends(require_user)]): ...
"""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import UserRole
from src.cp_common.errors import (
    AccountDisabledError,
    InsufficientRoleError,
    InvalidCredentialsError,
)
from src.cp_gateway.auth.jwt_handler import decode_token
from src.cp_gateway.user.db_models import UserModel

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """Resolve the Bearer token to an active UserModel (HTTP 401 otherwise)."""
    try:
        payload = decode_token(token, expected_type="access")
        user_id = uuid.UUID(payload.get("sub", ""))
    except (InvalidCredentialsError, ValueError):
        raise _CREDENTIALS_EXCEPTION from None

    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _CREDENTIALS_EXCEPTION

    if not user.is_active:
        raise AccountDisabledError()

    return user


async def require_user(
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    """Reject guests (InsufficientRoleError, 403)."""
    if current_user.role not in (UserRole.USER.value, UserRole.ADMIN.value):
        raise InsufficientRoleError(UserRole.USER.value)
    return current_user


async def require_admin(
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    if current_user.role != UserRole.ADMIN.value:
        raise InsufficientRoleError(UserRole.ADMIN.value)
    return current_user
