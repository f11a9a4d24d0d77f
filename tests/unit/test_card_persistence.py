"""Unit tests for CardRepository row mapping and SQL call shape (mocked DB)."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_cards.domain.models import Card, TradeReference
from src.cp_cards.infrastructure.persistence import (
    CardRepository,
    _card_to_params,
    _row_to_card,
)
from src.cp_common.enums import PaymentMethod, Position, TransactionType
from src.cp_common.errors import InternalError


def _row(**overrides: object) -> SimpleNamespace:
    fields: dict[str, object] = {
        "id": 7,
        "owner_id": "user-1",
        "name": "Kai Havertz",
        "rarity": "rare",
        "purchase_price": 40.0,
        "discount_percent": 10.0,
        "payment_method": "cash",
        "country": "Germany",
        "league": "Premier League",
        "club": "Arsenal",
        "age": 27,
        "version": "base",
        "season": "2025/26",
        "position": "sturm",
        "purchase_date": datetime(2026, 2, 1, tzinfo=UTC),
        "notes": "",
        "transaction_type": "forSale",
        "sale_price": None,
        "sale_date": None,
        "trade_given_ids": None,
        "trade_received_ids": None,
        "image_ref": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _scalar_result(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestRowMapping:
    def test_plain_row(self) -> None:
        card = _row_to_card(_row())
        assert card.id == 7
        assert card.payment_method == PaymentMethod.CASH
        assert card.position == Position.STURM
        assert card.transaction_type == TransactionType.FOR_SALE
        assert card.trade_reference is None

    def test_trade_reference_with_empty_received_side(self) -> None:
        card = _row_to_card(
            _row(transaction_type="tradedGiven", trade_given_ids=[7, 8], trade_received_ids=[])
        )
        assert card.trade_reference == TradeReference(given_cards=(7, 8), received_cards=())

    def test_params_carry_owner_and_position(self) -> None:
        card = _row_to_card(_row(trade_given_ids=[7], trade_received_ids=[9]))
        params = _card_to_params(card, "user-2", 3)
        assert params["owner_id"] == "user-2"
        assert params["sort_index"] == 3
        assert params["payment_method"] == "cash"
        assert params["transaction_type"] == "forSale"
        assert params["trade_given_ids"] == [7]
        assert params["trade_received_ids"] == [9]

    def test_params_without_reference(self) -> None:
        params = _card_to_params(_row_to_card(_row()), "user-1", 0)
        assert params["trade_given_ids"] is None
        assert params["trade_received_ids"] is None


class TestRepository:
    async def test_replace_deletes_then_upserts_in_order(self) -> None:
        db = AsyncMock()
        cards: list[Card] = [_row_to_card(_row(id=i)) for i in (5, 2, 9)]

        await CardRepository().replace_cards(db, "user-1", cards)

        assert db.execute.await_count == 2
        delete_call, upsert_call = db.execute.await_args_list
        assert "DELETE FROM cards" in str(delete_call.args[0])
        assert delete_call.args[1] == {"owner_id": "user-1"}
        params = upsert_call.args[1]
        assert [p["id"] for p in params] == [5, 2, 9]
        assert [p["sort_index"] for p in params] == [0, 1, 2]

    async def test_replace_with_empty_list_only_deletes(self) -> None:
        db = AsyncMock()
        await CardRepository().replace_cards(db, "user-1", [])
        db.execute.assert_awaited_once()

    async def test_allocate_card_id(self) -> None:
        db = AsyncMock()
        db.execute = AsyncMock(return_value=_scalar_result(42))
        assert await CardRepository().allocate_card_id(db) == 42

    async def test_allocate_card_id_without_value(self) -> None:
        db = AsyncMock()
        db.execute = AsyncMock(return_value=_scalar_result(None))
        with pytest.raises(InternalError):
            await CardRepository().allocate_card_id(db)

    async def test_find_owner(self) -> None:
        db = AsyncMock()
        db.execute = AsyncMock(return_value=_scalar_result("user-3"))
        assert await CardRepository().find_owner(db, 7) == "user-3"

        db.execute = AsyncMock(return_value=_scalar_result(None))
        assert await CardRepository().find_owner(db, 7) is None
