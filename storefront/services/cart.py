# storefront/services/cart.py
"""
Per-user cart: an immutable productId -> quantity mapping.

Every edit builds a new CartState from the old one and writes it back to
`carts/{uid}`; nothing mutates a cart in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from ..errors import ValidationError
from ..logging_config import get_logger
from .firebase import ensure_firestore, store_call
from .pricing import CartLine, clamp_quantity
from .products import get_products, is_available

log = get_logger(__name__)

COLLECTION = "carts"


def _as_quantity(product_id: str, value: Any) -> int:
    # stored carts come back from Firestore as plain JSON numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"bad quantity {value!r} for {product_id} in cart")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"bad quantity {value!r} for {product_id} in cart")
        value = int(value)
    return value


@dataclass(frozen=True)
class CartState:
    items: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        cleaned = {}
        for k, v in dict(self.items).items():
            qty = _as_quantity(k, v)
            if qty > 0:
                cleaned[str(k)] = qty
        object.__setattr__(self, "items", MappingProxyType(cleaned))

    @property
    def item_count(self) -> int:
        return sum(self.items.values())

    def quantity_of(self, product_id: str) -> int:
        return self.items.get(product_id, 0)

    def with_quantity(self, product_id: str, quantity: int) -> "CartState":
        items = dict(self.items)
        if quantity <= 0:
            items.pop(product_id, None)
        else:
            items[product_id] = quantity
        return CartState(items)

    def without(self, product_id: str) -> "CartState":
        return self.with_quantity(product_id, 0)

    def to_dict(self) -> Dict[str, int]:
        return dict(self.items)


# --- Store --------------------------------------------------------------------
def load_cart(uid: str) -> CartState:
    db = ensure_firestore()
    with store_call("loading cart"):
        snap = db.collection(COLLECTION).document(uid).get()
    if not snap.exists:
        return CartState()
    return CartState((snap.to_dict() or {}).get("items") or {})


def save_cart(uid: str, cart: CartState) -> CartState:
    db = ensure_firestore()
    with store_call("saving cart"):
        db.collection(COLLECTION).document(uid).set({
            "items": cart.to_dict(),
            "updatedAt": datetime.now(timezone.utc).isoformat(),
        })
    return cart


def clear_cart(uid: str) -> None:
    db = ensure_firestore()
    with store_call("clearing cart"):
        db.collection(COLLECTION).document(uid).delete()


# --- Edits --------------------------------------------------------------------
def _stock_of(product_id: str) -> int:
    product = get_products([product_id]).get(product_id)
    if product is None:
        raise ValidationError(f"product {product_id} not found")
    if not is_available(product):
        raise ValidationError(f"product {product_id} is not available")
    return int(product.get("stockQuantity") or 0)


def add_to_cart(uid: str, product_id: str) -> CartState:
    """One more of a product; declined once the cart already holds the whole stock."""
    stock = _stock_of(product_id)
    cart = load_cart(uid)
    current = cart.quantity_of(product_id)
    if current + 1 > stock:
        raise ValidationError(
            "out of stock" if stock <= 0 else f"only {stock} in stock"
        )
    log.info(f"[User: {uid}] cart +1 {product_id}")
    return save_cart(uid, cart.with_quantity(product_id, current + 1))


def change_quantity(uid: str, product_id: str, delta: int) -> CartState:
    """
    +/- on the cart page. Going to zero drops the line; stepping up past stock is
    declined rather than silently capped. Stepping down is always allowed, even
    when stock has fallen below what the cart holds.
    """
    cart = load_cart(uid)
    current = cart.quantity_of(product_id)
    wanted = current + delta
    if wanted <= 0:
        return save_cart(uid, cart.without(product_id))

    if delta <= 0:
        return save_cart(uid, cart.with_quantity(product_id, wanted))

    stock = _stock_of(product_id)
    if wanted > stock:
        raise ValidationError(f"only {stock} in stock")
    return save_cart(uid, cart.with_quantity(product_id, clamp_quantity(wanted, stock)))


def remove_from_cart(uid: str, product_id: str) -> CartState:
    return save_cart(uid, load_cart(uid).without(product_id))


# --- Merge with catalog -------------------------------------------------------
def cart_lines(cart: CartState) -> Tuple[List[CartLine], List[Dict[str, Any]]]:
    """
    Join the cart mapping with current product data.

    Returns the calculator lines plus the product dicts in the same order.
    Products that no longer exist or were taken off the shelf are dropped, so
    checkout only ever orders what the cart page shows.
    """
    products = get_products(cart.items.keys())
    lines: List[CartLine] = []
    shown: List[Dict[str, Any]] = []
    for pid, qty in cart.items.items():
        p = products.get(pid)
        if not is_available(p):
            continue
        lines.append(CartLine(
            product_id=pid,
            quantity=qty,
            unit_price=float(p.get("price") or 0),
            stock=int(p.get("stockQuantity") or 0),
        ))
        shown.append(p)
    return lines, shown
