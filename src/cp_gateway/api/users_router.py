"""Users API: who am I, and profiles."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import UserRole
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.api.router import user_info
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.profile_service import ProfileService
from src.cp_gateway.user.schemas import MeResponse, ProfileRequest

router = APIRouter(prefix="/users", tags=["users"])

_profiles = ProfileService()


def _respond(request: Request, data: dict) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/me")
async def get_me(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    request: Request,
) -> ApiResponse:
    data = MeResponse(
        **user_info(current_user).model_dump(),
        is_admin=current_user.role == UserRole.ADMIN.value,
    )
    return _respond(request, data.model_dump())


@router.get("/me/profile")
async def get_my_profile(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _profiles.get_profile(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.put("/me/profile")
async def save_my_profile(
    body: ProfileRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _profiles.save_profile(db, str(current_user.id), body.name, body.avatar_ref)
    return _respond(request, data.model_dump())


@router.get("/{user_id}/profile")
async def get_user_profile(
    user_id: uuid.UUID,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _profiles.get_user_profile(
        db, str(current_user.id), current_user.role, str(user_id)
    )
    return _respond(request, data.model_dump())
