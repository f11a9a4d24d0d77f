"""Tests for cp_common.money and the monotonic id allocator."""

import math

import pytest

from src.cp_common.id_generator import MonotonicIdAllocator
from src.cp_common.money import to_display, validate_discount, validate_price


class TestValidation:
    def test_price_zero_ok(self) -> None:
        validate_price(0.0)

    def test_negative_price(self) -> None:
        with pytest.raises(ValueError, match="Price"):
            validate_price(-0.01)

    @pytest.mark.parametrize("discount", [0.0, 50.0, 100.0])
    def test_discount_bounds_inclusive(self, discount: float) -> None:
        validate_discount(discount)

    @pytest.mark.parametrize("price", [math.inf, -math.inf, math.nan])
    def test_non_finite_price(self, price: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            validate_price(price)

    @pytest.mark.parametrize("discount", [-1.0, 100.5, math.nan, math.inf])
    def test_discount_out_of_range(self, discount: float) -> None:
        with pytest.raises(ValueError, match="Discount"):
            validate_discount(discount)


class TestDisplay:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0.0, "€0.00"),
            (80.0, "€80.00"),
            (1234.5, "€1,234.50"),
            (-12.0, "-€12.00"),
        ],
    )
    def test_to_display(self, amount: float, expected: str) -> None:
        assert to_display(amount) == expected


class TestMonotonicIdAllocator:
    def test_sequence(self) -> None:
        ids = MonotonicIdAllocator(start=10)
        assert [ids.next_id() for _ in range(3)] == [10, 11, 12]
        assert ids.peek() == 13

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError):
            MonotonicIdAllocator(start=-1)
