"""Unit tests for request schemas (auth, profile, cards)."""

import math

import pytest
from pydantic import ValidationError

from src.cp_cards.application.schemas import (
    CreateCardRequest,
    MarkSoldRequest,
    RecordTradeRequest,
    SalePriceRequest,
)
from src.cp_common.enums import PaymentMethod, Position
from src.cp_gateway.user.schemas import ProfileRequest, RegisterRequest


class TestRegisterRequest:
    def test_valid_input(self) -> None:
        req = RegisterRequest(username="alice_1", email="alice@example.com", password="Secret12")
        assert req.username == "alice_1"

    @pytest.mark.parametrize("username", ["ab", "a" * 65, "alice!", "al ice"])
    def test_bad_username(self, username: str) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username=username, email="a@b.com", password="Secret12")

    def test_invalid_email(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", email="not-an-email", password="Secret12")

    @pytest.mark.parametrize("password", ["Ab1", "alllower1", "ALLUPPER1", "NoDigitPass"])
    def test_weak_password(self, password: str) -> None:
        with pytest.raises(ValidationError, match="Password|at least"):
            RegisterRequest(username="alice", email="a@b.com", password=password)


class TestProfileRequest:
    def test_avatar_optional(self) -> None:
        assert ProfileRequest(name="Alice").avatar_ref is None

    def test_name_too_long(self) -> None:
        with pytest.raises(ValidationError):
            ProfileRequest(name="x" * 101)


def _card_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Florian Wirtz",
        "rarity": "limited",
        "purchase_price": 12.5,
        "payment_method": "eth",
        "age": 22,
        "position": "mittelfeld",
    }
    payload.update(overrides)
    return payload


class TestCardRequests:
    def test_defaults_and_enum_parsing(self) -> None:
        req = CreateCardRequest(**_card_payload())
        assert req.discount_percent == 0.0
        assert req.payment_method == PaymentMethod.ETH
        assert req.image_ref is None
        attrs = req.to_domain()
        assert attrs.position == Position.MITTELFELD
        assert attrs.purchase_price == 12.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"purchase_price": -1},
            {"discount_percent": 101},
            {"age": -3},
            {"payment_method": "paypal"},
            {"position": "libero"},
            {"name": ""},
            {"purchase_price": math.inf},
            {"purchase_price": math.nan},
            {"discount_percent": math.nan},
        ],
    )
    def test_rejects_bad_attributes(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            CreateCardRequest(**_card_payload(**overrides))

    def test_trade_needs_a_given_card(self) -> None:
        with pytest.raises(ValidationError):
            RecordTradeRequest(given_card_ids=[], received_card_ids=[3])
        assert RecordTradeRequest(given_card_ids=[1]).received_card_ids == []

    def test_sale_date_optional(self) -> None:
        assert MarkSoldRequest(sale_price=10).sale_date is None

    @pytest.mark.parametrize("price", [math.inf, math.nan])
    def test_sale_price_must_be_finite(self, price: float) -> None:
        with pytest.raises(ValidationError):
            MarkSoldRequest(sale_price=price)
        with pytest.raises(ValidationError):
            SalePriceRequest(sale_price=price)
