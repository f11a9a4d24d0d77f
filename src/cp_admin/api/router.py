"""Admin REST API. Every endpoint requires the admin role."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_admin.application.schemas import (
    AssignRoleRequest,
    SwapCollectionsRequest,
    TransferCardRequest,
)
from src.cp_admin.application.service import AdminService
from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_admin
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()

Admin = Annotated[UserModel, Depends(require_admin)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


def _respond(request: Request, data: dict) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/users/{user_id}/role")
async def assign_role(
    user_id: str, body: AssignRoleRequest, current_user: Admin, db: Db, request: Request
) -> ApiResponse:
    data = await _service.assign_role(db, user_id, body.role)
    return _respond(request, data.model_dump())


@router.get("/users/{user_id}/cards")
async def get_cards_for_user(
    user_id: str, current_user: Admin, db: Db, request: Request
) -> ApiResponse:
    data = await _service.get_cards_for_user(db, user_id)
    return _respond(request, data.model_dump())


@router.post("/cards/{card_id}/transfer")
async def transfer_card(
    card_id: int, body: TransferCardRequest, current_user: Admin, db: Db, request: Request
) -> ApiResponse:
    data = await _service.transfer_card(db, card_id, body.new_owner_id)
    return _respond(request, data.model_dump())


@router.post("/collections/swap")
async def swap_collections(
    body: SwapCollectionsRequest, current_user: Admin, db: Db, request: Request
) -> ApiResponse:
    data = await _service.swap_collections(db, body.user_a, body.user_b)
    return _respond(request, data.model_dump())
