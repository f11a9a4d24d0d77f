"""cp_portfolio REST API: read-only aggregates over the caller's cards."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_user
from src.cp_gateway.user.db_models import UserModel
from src.cp_portfolio.application.service import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])

_service = PortfolioService()

CurrentUser = Annotated[UserModel, Depends(require_user)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


def _respond(request: Request, data: dict) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/snapshot")
async def get_snapshot(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.snapshot(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/sold-balance")
async def get_sold_balance(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.sold_card_balance(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/investment-totals")
async def get_investment_totals(
    current_user: CurrentUser, db: Db, request: Request
) -> ApiResponse:
    data = await _service.investment_totals(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/total-invested")
async def get_total_invested(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.total_invested(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/total-returns")
async def get_total_returns(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.total_returns(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/total-balance")
async def get_total_balance(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.total_balance(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/transaction-summary")
async def get_transaction_summary(
    current_user: CurrentUser, db: Db, request: Request
) -> ApiResponse:
    data = await _service.transaction_summary(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/transaction-groups")
async def get_transaction_groups(
    current_user: CurrentUser, db: Db, request: Request
) -> ApiResponse:
    data = await _service.transaction_groups(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/crafted-cards")
async def get_crafted_cards(current_user: CurrentUser, db: Db, request: Request) -> ApiResponse:
    data = await _service.crafted_cards(db, str(current_user.id))
    return _respond(request, data.model_dump())
