# storefront/services/pricing.py
"""
Order totals for a cart.

Everything here is a pure function of the cart lines: totals are derived
fresh on every cart change and never stored or updated incrementally.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..errors import ValidationError

# Fixed store policy: 10% off once the cart holds two or more pairs.
DISCOUNT_RATE = 0.10
DISCOUNT_MIN_QUANTITY = 2


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int
    unit_price: float
    stock: int

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    discount_rate: float
    discount_amount: float
    final_amount: float
    item_count: int

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discountRate": self.discount_rate,
            "discountAmount": self.discount_amount,
            "finalAmount": self.final_amount,
            "itemCount": self.item_count,
        }


def total_quantity(lines: Iterable[CartLine]) -> int:
    return sum(l.quantity for l in lines)


def compute_subtotal(lines: Iterable[CartLine]) -> float:
    """Sum of unit price x quantity; 0 for an empty cart."""
    return sum((l.line_total for l in lines), 0.0)


def discount_rate_for(quantity: int) -> float:
    return DISCOUNT_RATE if quantity >= DISCOUNT_MIN_QUANTITY else 0.0


def compute_discount(lines: Iterable[CartLine]) -> float:
    lines = list(lines)
    return compute_subtotal(lines) * discount_rate_for(total_quantity(lines))


def compute_final_amount(lines: Iterable[CartLine]) -> float:
    lines = list(lines)
    return compute_subtotal(lines) - compute_discount(lines)


def compute_totals(lines: Iterable[CartLine]) -> OrderTotals:
    lines: List[CartLine] = list(lines)
    count = total_quantity(lines)
    subtotal = compute_subtotal(lines)
    rate = discount_rate_for(count)
    discount = subtotal * rate
    return OrderTotals(
        subtotal=subtotal,
        discount_rate=rate,
        discount_amount=discount,
        final_amount=subtotal - discount,
        item_count=count,
    )


def validate_quantity(quantity: int, available_stock: int) -> int:
    """
    Reject a requested quantity that is below 1 or above the stock snapshot.

    Returns the quantity unchanged so callers can use it inline.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"quantity must be an integer, got {quantity!r}")
    if quantity < 1:
        raise ValidationError("quantity must be at least 1")
    if quantity > available_stock:
        raise ValidationError(
            f"only {max(available_stock, 0)} in stock, cannot take {quantity}"
        )
    return quantity


def validate_line(line: CartLine) -> CartLine:
    if line.unit_price < 0:
        raise ValidationError(f"product {line.product_id} has a negative price")
    validate_quantity(line.quantity, line.stock)
    return line


def clamp_quantity(quantity: int, available_stock: int) -> int:
    """
    Cart-page behaviour for +/- buttons: never above stock, 0 means "drop the line".
    """
    return max(0, min(quantity, max(available_stock, 0)))
