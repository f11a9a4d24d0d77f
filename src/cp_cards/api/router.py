"""cp_cards REST API: the caller's own collection. Guests are rejected."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.application.schemas import (
    CreateCardRequest,
    MarkSoldRequest,
    RecordTradeRequest,
    RevertTradeRequest,
    SalePriceRequest,
    UpdateCardRequest,
)
from src.cp_cards.application.service import CardApplicationService
from src.cp_cards.domain.models import TradeReference
from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_user
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/cards", tags=["cards"])

_service = CardApplicationService()


def _respond(request: Request, data: dict) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_cards(
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_cards(db, str(current_user.id))
    return _respond(request, data.model_dump())


@router.get("/suggestions")
async def suggestions(
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    field: str = Query(..., description="country | league | club | season"),
    q: str | None = Query(None, description="Case-insensitive substring filter"),
) -> ApiResponse:
    data = await _service.suggestions(db, str(current_user.id), field, q)
    return _respond(request, data.model_dump())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_card(
    body: CreateCardRequest,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_card(
        db, str(current_user.id), body.to_domain(), image_ref=body.image_ref
    )
    return _respond(request, data.model_dump())


@router.post("/trades")
async def record_trade(
    body: RecordTradeRequest,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.record_trade(
        db, str(current_user.id), body.given_card_ids, body.received_card_ids
    )
    return _respond(request, data.model_dump())


@router.put("/{card_id}")
async def update_card(
    card_id: int,
    body: UpdateCardRequest,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_card(db, str(current_user.id), card_id, body.to_domain())
    return _respond(request, data.model_dump())


@router.delete("/{card_id}")
async def delete_card(
    card_id: int,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.delete_card(db, str(current_user.id), card_id)
    return _respond(request, data.model_dump())


@router.put("/{card_id}/sale-price")
async def set_sale_price(
    card_id: int,
    body: SalePriceRequest,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.set_sale_price(db, str(current_user.id), card_id, body.sale_price)
    return _respond(request, data.model_dump())


@router.post("/{card_id}/sell")
async def mark_sold(
    card_id: int,
    body: MarkSoldRequest,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.mark_sold(
        db, str(current_user.id), card_id, body.sale_price, body.sale_date
    )
    return _respond(request, data.model_dump())


@router.post("/{card_id}/revert-trade")
async def revert_trade(
    card_id: int,
    current_user: Annotated[UserModel, Depends(require_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    body: RevertTradeRequest | None = None,
) -> ApiResponse:
    reference = None
    if body is not None and body.trade_reference is not None:
        reference = TradeReference(
            given_cards=tuple(body.trade_reference.given_cards),
            received_cards=tuple(body.trade_reference.received_cards),
        )
    data = await _service.revert_trade(db, str(current_user.id), card_id, reference)
    return _respond(request, data.model_dump())
