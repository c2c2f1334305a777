from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from firebase_admin import auth as fb_auth

from ..errors import SubmissionError
from ..logging_config import get_logger
from ..services.firebase import ensure_app
from ..services.roles import ADMIN, CASHIER, dashboard_for, get_user_role

log = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@dataclass(frozen=True)
class CurrentUser:
    uid: str
    role: str
    email: Optional[str] = None


def _bearer(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="missing bearer token")
    return token.strip()


def current_user(authorization: Optional[str] = Header(None)) -> CurrentUser:
    """
    Resolve the caller from a Firebase ID token. Sign-in itself happens in the
    browser against Firebase Auth; we only verify what it issued.
    """
    token = _bearer(authorization)
    try:
        claims = fb_auth.verify_id_token(token, app=ensure_app())
    except (ValueError, fb_auth.InvalidIdTokenError, fb_auth.ExpiredIdTokenError,
            fb_auth.RevokedIdTokenError, fb_auth.CertificateFetchError) as e:
        log.warning(f"rejected ID token: {e}")
        raise HTTPException(status_code=401, detail="invalid token")

    uid = claims["uid"]
    try:
        role = get_user_role(uid)
    except SubmissionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return CurrentUser(uid=uid, role=role, email=claims.get("email"))


def require_role(*roles: str):
    """Dependency factory: 403 unless the caller holds one of `roles`."""
    def _check(user: CurrentUser = Depends(current_user)) -> CurrentUser:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="not allowed")
        return user
    return _check


staff_only = require_role(CASHIER, ADMIN)
admin_only = require_role(ADMIN)


@router.get("/me")
def me(user: CurrentUser = Depends(current_user)):
    return {
        "uid": user.uid,
        "email": user.email,
        "role": user.role,
        "dashboard": dashboard_for(user.role),
    }
