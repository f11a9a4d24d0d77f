"""Unit tests for auth dependencies (role gates and token resolution)."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from src.cp_common.errors import (
    AccountDisabledError,
    InsufficientRoleError,
    InvalidCredentialsError,
)
from src.cp_gateway.auth.dependencies import get_current_user, require_admin, require_user
from src.cp_gateway.auth.jwt_handler import create_access_token


def _user(role: str, is_active: bool = True) -> MagicMock:
    user = MagicMock()
    user.id = uuid.uuid4()
    user.role = role
    user.is_active = is_active
    return user


def _db_returning(user: object) -> AsyncMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    db = AsyncMock()
    db.execute = AsyncMock(return_value=result)
    return db


class TestRoleGates:
    async def test_user_and_admin_pass_require_user(self) -> None:
        for role in ("user", "admin"):
            user = _user(role)
            assert await require_user(user) is user

    async def test_guest_rejected_by_require_user(self) -> None:
        with pytest.raises(InsufficientRoleError) as exc_info:
            await require_user(_user("guest"))
        assert exc_info.value.http_status == 403

    async def test_only_admin_passes_require_admin(self) -> None:
        admin = _user("admin")
        assert await require_admin(admin) is admin
        for role in ("user", "guest"):
            with pytest.raises(InsufficientRoleError):
                await require_admin(_user(role))


class TestGetCurrentUser:
    async def test_valid_token(self) -> None:
        user = _user("user")
        token = create_access_token(str(user.id))
        assert await get_current_user(token, _db_returning(user)) is user

    async def test_bad_token_is_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("garbage", _db_returning(None))
        assert exc_info.value.status_code == 401

    async def test_non_uuid_subject_is_401(self) -> None:
        with (
            patch(
                "src.cp_gateway.auth.dependencies.decode_token",
                return_value={"sub": "not-a-uuid", "type": "access"},
            ),
            pytest.raises(HTTPException),
        ):
            await get_current_user("token", _db_returning(None))

    async def test_expired_token_is_401(self) -> None:
        with (
            patch(
                "src.cp_gateway.auth.dependencies.decode_token",
                side_effect=InvalidCredentialsError(),
            ),
            pytest.raises(HTTPException),
        ):
            await get_current_user("token", _db_returning(None))

    async def test_unknown_user_is_401(self) -> None:
        token = create_access_token(str(uuid.uuid4()))
        with pytest.raises(HTTPException):
            await get_current_user(token, _db_returning(None))

    async def test_disabled_user(self) -> None:
        user = _user("user", is_active=False)
        token = create_access_token(str(user.id))
        with pytest.raises(AccountDisabledError):
            await get_current_user(token, _db_returning(user))
