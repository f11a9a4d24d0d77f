"""cp_history REST API: read the change log, trigger the one-time backfill."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_user
from src.cp_gateway.user.db_models import UserModel
from src.cp_history.application.service import ChangeHistoryService

router = APIRouter(prefix="/history", tags=["history"])

_service = ChangeHistoryService()


@router.get("")
async def list_history(
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    limit: int = Query(20, description="Items per page (1-100)"),
    offset: int = Query(0, description="Entries to skip"),
) -> ApiResponse:
    data = await _service.list_history(db, str(current_user.id), limit, offset)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/backfill")
async def backfill(
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.backfill(db, str(current_user.id))
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
