# storefront/services/orders.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from firebase_admin import firestore

from ..errors import StatusConflict, ValidationError
from ..logging_config import get_logger
from .cart import COLLECTION as CART_COLLECTION, cart_lines, load_cart
from .firebase import ensure_firestore, store_call
from .pricing import CartLine, OrderTotals, compute_totals, validate_line
from .profiles import get_profile

log = get_logger(__name__)

ORDERS = "orders"
ORDER_ITEMS = "order_items"

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
STATUSES = (PENDING, APPROVED, REJECTED)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _order_to_dict(snap, lines: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Firestore order document -> the nested shape routes return."""
    row = snap.to_dict() or {}
    return {
        "id": snap.id,
        "userId": row.get("userId"),
        "status": row.get("status", PENDING),
        "amounts": {
            "subtotal": float(row.get("totalAmount") or 0),
            "discount": float(row.get("discountAmount") or 0),
            "total": float(row.get("finalAmount") or 0),
        },
        "lines": lines if lines is not None else [],
        "approvedBy": row.get("approvedBy"),
        "createdAt": row.get("createdAt"),
        "updatedAt": row.get("updatedAt"),
    }


def _line_to_dict(snap) -> Dict[str, Any]:
    row = snap.to_dict() or {}
    qty = int(row.get("quantity") or 0)
    price = float(row.get("price") or 0)
    return {
        "productId": row.get("productId"),
        "quantity": qty,
        "unitPrice": price,
        "lineTotal": price * qty,
    }


# --- Submission ---------------------------------------------------------------
def submit_order(uid: str, totals: OrderTotals, lines: List[CartLine]) -> str:
    """
    Write the order, its lines and the emptied cart in one batch.

    Either every document lands or none does, so an order can never exist
    without its lines.
    """
    db = ensure_firestore()
    order_ref = db.collection(ORDERS).document()
    now = _now()

    batch = db.batch()
    batch.set(order_ref, {
        "userId": uid,
        "totalAmount": totals.subtotal,
        "discountAmount": totals.discount_amount,
        "finalAmount": totals.final_amount,
        "status": PENDING,
        "approvedBy": None,
        "createdAt": now,
        "updatedAt": now,
    })
    for l in lines:
        batch.set(db.collection(ORDER_ITEMS).document(), {
            "orderId": order_ref.id,
            "productId": l.product_id,
            "quantity": l.quantity,
            "price": l.unit_price,
        })
    batch.delete(db.collection(CART_COLLECTION).document(uid))

    with store_call(f"placing order {order_ref.id}"):
        batch.commit()
    return order_ref.id


def checkout(uid: str) -> Dict[str, Any]:
    """
    Turn the user's cart into a pending order.

    Lines are checked against the stock read while loading the cart; a bad
    line or a failed write leaves the cart as it was.
    """
    log_prefix = f"[User: {uid}]"
    lines, _ = cart_lines(load_cart(uid))
    if not lines:
        raise ValidationError("cart is empty")

    for l in lines:
        validate_line(l)

    totals = compute_totals(lines)
    order_id = submit_order(uid, totals, lines)
    log.info(
        f"{log_prefix} [Order: {order_id}] placed: {totals.item_count} item(s), "
        f"subtotal {totals.subtotal:.2f}, discount {totals.discount_amount:.2f}, "
        f"total {totals.final_amount:.2f}"
    )
    return {"orderId": order_id, "status": PENDING, **totals.as_dict()}


# --- Reads --------------------------------------------------------------------
def _order_lines(order_id: str) -> List[Dict[str, Any]]:
    db = ensure_firestore()
    q = db.collection(ORDER_ITEMS).where("orderId", "==", order_id)
    with store_call(f"loading lines of order {order_id}"):
        return [_line_to_dict(s) for s in q.stream()]


def get_order(order_id: str) -> Optional[Dict[str, Any]]:
    if not order_id:
        return None
    db = ensure_firestore()
    with store_call(f"loading order {order_id}"):
        snap = db.collection(ORDERS).document(order_id).get()
    if not snap.exists:
        return None
    return _order_to_dict(snap, _order_lines(order_id))


def _with_customer(order: Dict[str, Any]) -> Dict[str, Any]:
    prof = get_profile(order["userId"]) if order.get("userId") else None
    order["customer"] = {
        "name": (prof or {}).get("fullName"),
        "email": (prof or {}).get("email"),
    }
    return order


def list_orders(status: Optional[str] = None, limit: int = 200) -> List[Dict[str, Any]]:
    """Staff view, newest first, with the customer's name and email attached."""
    if status is not None and status not in STATUSES:
        raise ValidationError(f"unknown order status {status!r}")
    db = ensure_firestore()
    q = db.collection(ORDERS)
    if status:
        q = q.where("status", "==", status)
    q = q.order_by("createdAt", direction=firestore.Query.DESCENDING).limit(limit)
    with store_call("loading orders"):
        snaps = list(q.stream())
    return [_with_customer(_order_to_dict(s)) for s in snaps]


def list_user_orders(uid: str) -> List[Dict[str, Any]]:
    db = ensure_firestore()
    q = (
        db.collection(ORDERS)
        .where("userId", "==", uid)
        .order_by("createdAt", direction=firestore.Query.DESCENDING)
    )
    with store_call("loading order history"):
        snaps = list(q.stream())
    return [_order_to_dict(s, _order_lines(s.id)) for s in snaps]


# --- Status -------------------------------------------------------------------
def _set_status(order_id: str, status: str, by_uid: str) -> Optional[Dict[str, Any]]:
    db = ensure_firestore()
    ref = db.collection(ORDERS).document(order_id)
    with store_call(f"loading order {order_id}"):
        snap = ref.get()
    if not snap.exists:
        return None

    current = (snap.to_dict() or {}).get("status", PENDING)
    if current != PENDING:
        raise StatusConflict(f"order {order_id} is already {current}")

    with store_call(f"marking order {order_id} {status}"):
        ref.update({"status": status, "approvedBy": by_uid, "updatedAt": _now()})
    log.info(f"[Order: {order_id}] {status} by {by_uid}")
    return get_order(order_id)


def approve_order(order_id: str, by_uid: str) -> Optional[Dict[str, Any]]:
    return _set_status(order_id, APPROVED, by_uid)


def reject_order(order_id: str, by_uid: str) -> Optional[Dict[str, Any]]:
    return _set_status(order_id, REJECTED, by_uid)
