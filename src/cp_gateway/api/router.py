"""Auth API: register, login, refresh.

Register runs in its own transaction; login and refresh only read.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.database import get_db_session
from src.cp_common.enums import UserRole
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from src.cp_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()

Db = Annotated[AsyncSession, Depends(get_db_session)]

_ACCESS_TOKEN_SECONDS = settings.JWT_EXPIRE_MINUTES * 60


def user_info(user: UserModel) -> UserInfo:
    """Public view of a users row, shared with the /users router."""
    return UserInfo(
        user_id=str(user.id),
        username=user.username,
        email=user.email,
        role=UserRole(user.role),
    )


def _respond(request: Request, data: dict, message: str) -> ApiResponse:
    resp = success_response(data, request_id=getattr(request.state, "request_id", None))
    resp.message = message
    return resp


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Create an account")
async def register(request: Request, body: RegisterRequest, db: Db) -> ApiResponse:
    async with db.begin():
        user = await _service.register(body.username, body.email, body.password, db)

    data = RegisterResponse(**user_info(user).model_dump(), created_at=user.created_at.isoformat())
    return _respond(request, data.model_dump(), "User registered successfully")


@router.post("/login", summary="Exchange credentials for a token pair")
async def login(request: Request, body: LoginRequest, db: Db) -> ApiResponse:
    user, access, refresh = await _service.login(body.username, body.password, db)
    data = LoginResponse(
        access_token=access,
        refresh_token=refresh,
        expires_in=_ACCESS_TOKEN_SECONDS,
        user=user_info(user),
    )
    return _respond(request, data.model_dump(), "Login successful")


@router.post("/refresh", summary="Exchange a refresh token for a new access token")
async def refresh_token(request: Request, body: RefreshRequest) -> ApiResponse:
    access = await _service.refresh(body.refresh_token)
    data = RefreshResponse(access_token=access, expires_in=_ACCESS_TOKEN_SECONDS)
    return _respond(request, data.model_dump(), "Token refreshed")
