from __future__ import annotations
from typing import Dict, Any, Optional

from ..errors import ValidationError
from .firebase import ensure_firestore, store_call

COLLECTION = "profiles"

EDITABLE = ("fullName", "phone")


def get_profile(uid: str) -> Optional[Dict[str, Any]]:
    if not uid:
        return None
    db = ensure_firestore()
    with store_call("loading profile"):
        snap = db.collection(COLLECTION).document(uid).get()
    if not snap.exists:
        return None
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


def update_profile(uid: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Only the name and phone are user-editable; everything else is ignored."""
    if not uid:
        raise ValidationError("uid required")
    data = {k: (payload.get(k) or "").strip() or None for k in EDITABLE if k in payload}
    db = ensure_firestore()
    ref = db.collection(COLLECTION).document(uid)
    with store_call("updating profile"):
        ref.set(data, merge=True)
    return get_profile(uid) or {"id": uid, **data}
