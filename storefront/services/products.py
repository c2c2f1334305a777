# storefront/services/products.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Dict, Any, Iterable, Optional

from firebase_admin import firestore

from ..errors import ValidationError
from ..logging_config import get_logger
from ..settings import settings
from .firebase import ensure_firestore, store_call

log = get_logger(__name__)

COLLECTION = "products"

# Shop page price bands, upper bound exclusive
PRICE_RANGES = {
    "low": (0.0, 1000.0),
    "mid": (1000.0, 2500.0),
    "high": (2500.0, float("inf")),
}


def _snap_to_dict(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


# --- READ HELPERS -------------------------------------------------------------
def list_products(search: Optional[str] = None,
                  brand: Optional[str] = None,
                  size: Optional[str] = None,
                  price_range: Optional[str] = None,
                  active_only: bool = True) -> List[Dict[str, Any]]:
    """
    Shop listing, newest first. Search and facet filters run in memory the
    same way the shop page filters them.
    """
    db = ensure_firestore()
    col = db.collection(COLLECTION)
    if active_only:
        col = col.where("isActive", "==", True)
    col = col.order_by("createdAt", direction=firestore.Query.DESCENDING)

    with store_call("loading products"):
        out = [_snap_to_dict(d) for d in col.stream()]
    return filter_products(out, search=search, brand=brand, size=size, price_range=price_range)


def filter_products(products: Iterable[Dict[str, Any]],
                    search: Optional[str] = None,
                    brand: Optional[str] = None,
                    size: Optional[str] = None,
                    price_range: Optional[str] = None) -> List[Dict[str, Any]]:
    out = list(products)

    q = (search or "").strip().lower()
    if q:
        out = [
            p for p in out
            if q in (p.get("name") or "").lower()
            or q in (p.get("brand") or "").lower()
            or q in (p.get("description") or "").lower()
        ]

    if brand and brand != "all":
        out = [p for p in out if p.get("brand") == brand]

    if size and size != "all":
        out = [p for p in out if p.get("size") == size]

    if price_range and price_range != "all":
        if price_range not in PRICE_RANGES:
            raise ValidationError(f"unknown price range {price_range!r}")
        lo, hi = PRICE_RANGES[price_range]
        out = [p for p in out if lo <= float(p.get("price") or 0) < hi]

    return out


def list_facets(products: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Distinct non-empty brands and sizes, in first-seen order."""
    brands: Dict[str, None] = {}
    sizes: Dict[str, None] = {}
    for p in products:
        if p.get("brand"):
            brands.setdefault(p["brand"])
        if p.get("size"):
            sizes.setdefault(p["size"])
    return {"brands": list(brands), "sizes": list(sizes)}


def get_product(product_id: str) -> Optional[Dict[str, Any]]:
    if not product_id:
        return None
    db = ensure_firestore()
    with store_call(f"loading product {product_id}"):
        snap = db.collection(COLLECTION).document(product_id).get()
    if not snap.exists:
        return None
    return _snap_to_dict(snap)


def get_products(product_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """Load several products by id; ids with no document are simply absent."""
    out: Dict[str, Dict[str, Any]] = {}
    for pid in product_ids:
        if pid in out:
            continue
        p = get_product(pid)
        if p is not None:
            out[pid] = p
    return out


def is_available(product: Optional[Dict[str, Any]]) -> bool:
    """Exists and has not been taken off the shelf by staff."""
    return product is not None and product.get("isActive", True) is not False


def stock_badge(product: Dict[str, Any]) -> str:
    qty = int(product.get("stockQuantity") or 0)
    if qty <= 0:
        return "out_of_stock"
    if qty < settings.low_stock_threshold:
        return "low_stock"
    return "in_stock"


# --- WRITE HELPERS ------------------------------------------------------------
def _clean(payload: Dict[str, Any], partial: bool) -> Dict[str, Any]:
    data = dict(payload)
    data.pop("id", None)

    if "name" in data or not partial:
        name = (data.get("name") or "").strip()
        if not name:
            raise ValidationError("name is required")
        data["name"] = name

    if "price" in data or not partial:
        price = data.get("price")
        if price is None or float(price) < 0:
            raise ValidationError("price must be zero or more")
        data["price"] = float(price)

    if "stockQuantity" in data or not partial:
        stock = data.get("stockQuantity")
        if stock is None or int(stock) < 0:
            raise ValidationError("stockQuantity must be zero or more")
        data["stockQuantity"] = int(stock)

    return data


def create_product(payload: Dict[str, Any], created_by: Optional[str] = None) -> Dict[str, Any]:
    db = ensure_firestore()
    data = _clean(payload, partial=False)

    base = {
        "name": data["name"],
        "description": data.get("description") or "",
        "price": data["price"],
        "stockQuantity": data["stockQuantity"],
        "size": data.get("size"),
        "brand": data.get("brand"),
        "color": data.get("color"),
        "imageUrl": data.get("imageUrl"),
        "isActive": bool(data.get("isActive", True)),
        "createdBy": created_by,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }

    ref = db.collection(COLLECTION).document()
    with store_call("adding product"):
        ref.set(base)
    log.info(f"[Product: {ref.id}] {base['name']} added by {created_by}")
    out = base.copy()
    out["id"] = ref.id
    return out


def update_product(product_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if not product_id:
        raise ValidationError("product_id required")
    if get_product(product_id) is None:
        return None
    data = _clean(payload, partial=True)
    db = ensure_firestore()
    ref = db.collection(COLLECTION).document(product_id)
    with store_call(f"updating product {product_id}"):
        ref.set(data, merge=True)
    return get_product(product_id)
