from __future__ import annotations
from typing import Dict, Any, List, Iterable
from datetime import datetime, timezone

from firebase_admin import firestore
from .firebase import ensure_firestore, store_call
from .products import get_product
from .profiles import get_profile
from ..errors import ValidationError

COLLECTION = "product_reviews"


def create_review(uid: str, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a review document:
      { productId, userId, rating, reviewText, reviewerName, createdAt }
    """
    rating = int(payload.get("rating") or 0)
    text = (payload.get("reviewText") or "").strip()

    if rating == 0:
        raise ValidationError("please select a rating")
    if rating < 1 or rating > 5:
        raise ValidationError("rating must be between 1 and 5")
    if get_product(product_id) is None:
        raise ValidationError(f"product {product_id} not found")

    prof = get_profile(uid) or {}
    data: Dict[str, Any] = {
        "productId": product_id,
        "userId": uid,
        "rating": rating,
        "reviewText": text,
        "reviewerName": prof.get("fullName"),
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }

    db = ensure_firestore()
    ref = db.collection(COLLECTION).document()
    with store_call("submitting review"):
        ref.set(data)
    data["id"] = ref.id
    return data


def list_reviews(product_id: str, limit: int = 100) -> List[Dict[str, Any]]:
    """
    Return a product's reviews (newest first).
    """
    db = ensure_firestore()
    q = (
        db.collection(COLLECTION)
        .where("productId", "==", product_id)
        .order_by("createdAt", direction=firestore.Query.DESCENDING)
        .limit(limit)
    )
    out: List[Dict[str, Any]] = []
    with store_call("loading reviews"):
        for snap in q.stream():
            row = snap.to_dict() or {}
            row["id"] = snap.id
            out.append(row)
    return out


def average_rating(reviews: Iterable[Dict[str, Any]]) -> float:
    ratings = [int(r.get("rating") or 0) for r in reviews]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)
