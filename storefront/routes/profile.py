from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..services.profiles import get_profile, update_profile
from .auth import CurrentUser, current_user

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileIn(BaseModel):
    fullName: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=40)


class ProfileOut(ProfileIn):
    id: str
    email: Optional[str] = None


@router.get("", response_model=ProfileOut)
def profile_get(user: CurrentUser = Depends(current_user)):
    return get_profile(user.uid) or {"id": user.uid, "email": user.email}


@router.patch("", response_model=ProfileOut)
def profile_update(body: ProfileIn, user: CurrentUser = Depends(current_user)):
    return update_profile(user.uid, body.model_dump(exclude_unset=True))
