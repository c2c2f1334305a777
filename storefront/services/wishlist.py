from __future__ import annotations
from datetime import datetime, timezone
from typing import Dict, Any, List

from ..errors import ValidationError
from .firebase import ensure_firestore, store_call
from .products import get_product, get_products

COLLECTION = "wishlist"


def _doc_id(uid: str, product_id: str) -> str:
    # one row per (user, product)
    return f"{uid}_{product_id}"


def list_wishlist(uid: str) -> List[str]:
    db = ensure_firestore()
    q = db.collection(COLLECTION).where("userId", "==", uid)
    with store_call("loading wishlist"):
        return [(s.to_dict() or {}).get("productId") for s in q.stream()]


def wishlist_products(uid: str) -> List[Dict[str, Any]]:
    ids = list_wishlist(uid)
    products = get_products(ids)
    return [products[i] for i in ids if i in products]


def toggle_wishlist(uid: str, product_id: str) -> bool:
    """Add the product if absent, remove it if present. True means it is now wished."""
    db = ensure_firestore()
    ref = db.collection(COLLECTION).document(_doc_id(uid, product_id))
    with store_call("loading wishlist"):
        wished = ref.get().exists

    # removing stays possible after a product is deleted
    if wished:
        with store_call("updating wishlist"):
            ref.delete()
        return False

    if get_product(product_id) is None:
        raise ValidationError(f"product {product_id} not found")
    with store_call("updating wishlist"):
        ref.set({
            "userId": uid,
            "productId": product_id,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        })
    return True
