"""Money helpers for card prices.

Prices are euro amounts as float; the client enters them with decimals and
no currency conversion is ever performed. Rounding happens only for display.
Infinity and NaN are rejected everywhere a price enters the system.
"""

import math


def validate_price(price: float) -> None:
    """Validate that a purchase or sale price is finite and non-negative."""
    if not math.isfinite(price):
        raise ValueError(f"Price must be a finite number, got {price}")
    if price < 0:
        raise ValueError(f"Price must be >= 0, got {price}")


def validate_discount(discount_percent: float) -> None:
    """Validate that a discount is within [0, 100] percent."""
    if not math.isfinite(discount_percent) or not (0 <= discount_percent <= 100):
        raise ValueError(f"Discount must be between 0 and 100 percent, got {discount_percent}")


def to_display(amount: float) -> str:
    """Format an amount for display: 1234.5 -> '€1,234.50', -12 -> '-€12.00'."""
    if amount < 0:
        return f"-€{-amount:,.2f}"
    return f"€{amount:,.2f}"
