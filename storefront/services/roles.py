# storefront/services/roles.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Any

from firebase_admin import auth as fb_auth

from ..errors import StatusConflict, ValidationError
from ..logging_config import get_logger
from .firebase import ensure_app, ensure_firestore, store_call

log = get_logger(__name__)

COLLECTION = "user_roles"

CUSTOMER = "customer"
CASHIER = "cashier"
ADMIN = "admin"
ROLES = (CUSTOMER, CASHIER, ADMIN)

DASHBOARDS = {ADMIN: "/admin", CASHIER: "/cashier"}


def get_user_role(uid: str) -> str:
    """Stored role for a user; anyone without a role row is a customer."""
    db = ensure_firestore()
    with store_call("loading role"):
        snap = db.collection(COLLECTION).document(uid).get()
    if not snap.exists:
        return CUSTOMER
    role = (snap.to_dict() or {}).get("role")
    return role if role in ROLES else CUSTOMER


def dashboard_for(role: str) -> str:
    return DASHBOARDS.get(role, "/profile")


def set_user_role(uid: str, role: str) -> None:
    if role not in ROLES:
        raise ValidationError(f"unknown role {role!r}")
    db = ensure_firestore()
    with store_call(f"assigning role {role}"):
        db.collection(COLLECTION).document(uid).set({"role": role})


def register_cashier(email: str, password: str, full_name: str) -> Dict[str, Any]:
    """
    Create a Firebase Auth account and give it the cashier role.

    The account is created first; if the profile or role write fails the
    account exists without a role and an admin has to retry the role step.
    """
    email = (email or "").strip()
    full_name = (full_name or "").strip()
    if not email or "@" not in email:
        raise ValidationError("a valid email is required")
    if not password or len(password) < 6:
        raise ValidationError("password must be at least 6 characters")
    if not full_name:
        raise ValidationError("full name is required")

    with store_call("creating cashier account"):
        try:
            user = fb_auth.create_user(
                email=email, password=password, display_name=full_name, app=ensure_app()
            )
        except fb_auth.EmailAlreadyExistsError:
            raise StatusConflict(f"{email} already has an account")

    db = ensure_firestore()
    with store_call("saving cashier profile"):
        db.collection("profiles").document(user.uid).set({
            "fullName": full_name,
            "email": email,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }, merge=True)
    set_user_role(user.uid, CASHIER)

    log.info(f"[User: {user.uid}] registered as cashier ({email})")
    return {"uid": user.uid, "email": email, "fullName": full_name, "role": CASHIER}
