# storefront/services/bookings.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, Any, List, Optional

from firebase_admin import firestore

from ..errors import StatusConflict, ValidationError
from ..logging_config import get_logger
from .firebase import ensure_firestore, store_call
from .pricing import validate_quantity
from .products import get_product, is_available, get_products

log = get_logger(__name__)

COLLECTION = "bookings"

PENDING = "pending"
CONFIRMED = "confirmed"
COMPLETED = "completed"
CANCELLED = "cancelled"
STATUSES = (PENDING, CONFIRMED, COMPLETED, CANCELLED)


def _today() -> date:
    return datetime.now(timezone.utc).date()


def create_booking(uid: str,
                   product_id: str,
                   quantity: int,
                   pickup_date: Optional[date],
                   notes: Optional[str] = None) -> Dict[str, Any]:
    """
    Reserve a product for in-store pickup. Bookings are confirmed on creation
    and charged at list price; the cart discount does not apply.
    """
    if pickup_date is None:
        raise ValidationError("pickup date is required")
    if pickup_date < _today():
        raise ValidationError("pickup date cannot be in the past")

    product = get_product(product_id)
    if not is_available(product):
        raise ValidationError(f"product {product_id} is not available")

    validate_quantity(quantity, int(product.get("stockQuantity") or 0))

    data: Dict[str, Any] = {
        "userId": uid,
        "productId": product_id,
        "quantity": quantity,
        "pickupDate": pickup_date.isoformat(),
        "totalAmount": float(product.get("price") or 0) * quantity,
        "notes": (notes or "").strip(),
        "status": CONFIRMED,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }

    db = ensure_firestore()
    ref = db.collection(COLLECTION).document()
    with store_call("creating booking"):
        ref.set(data)
    log.info(f"[User: {uid}] booking {ref.id} confirmed for {quantity} x {product_id} on {data['pickupDate']}")
    data["id"] = ref.id
    return data


def list_user_bookings(uid: str) -> List[Dict[str, Any]]:
    """User's bookings, newest first, each with a short product summary."""
    db = ensure_firestore()
    q = (
        db.collection(COLLECTION)
        .where("userId", "==", uid)
        .order_by("createdAt", direction=firestore.Query.DESCENDING)
    )
    with store_call("loading bookings"):
        rows = []
        for snap in q.stream():
            row = snap.to_dict() or {}
            row["id"] = snap.id
            rows.append(row)

    products = get_products(r.get("productId") for r in rows)
    for row in rows:
        p = products.get(row.get("productId"))
        row["product"] = (
            {"name": p.get("name"), "imageUrl": p.get("imageUrl"), "brand": p.get("brand")}
            if p else None
        )
    return rows


def cancel_booking(uid: str, booking_id: str) -> Optional[Dict[str, Any]]:
    """Only the owner can cancel, and only while the booking is still pending."""
    db = ensure_firestore()
    ref = db.collection(COLLECTION).document(booking_id)
    with store_call("loading booking"):
        snap = ref.get()
    if not snap.exists or (snap.to_dict() or {}).get("userId") != uid:
        return None

    status = (snap.to_dict() or {}).get("status")
    if status != PENDING:
        raise StatusConflict(f"booking {booking_id} is {status} and can no longer be cancelled")

    with store_call("cancelling booking"):
        ref.update({"status": CANCELLED})
    out = snap.to_dict() or {}
    out.update({"id": booking_id, "status": CANCELLED})
    return out
