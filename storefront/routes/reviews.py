from __future__ import annotations
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..services.reviews import create_review, list_reviews
from .auth import CurrentUser, current_user

router = APIRouter(prefix="/reviews", tags=["reviews"])


class ReviewIn(BaseModel):
    rating: int = Field(..., ge=0, le=5)
    reviewText: Optional[str] = Field("", max_length=2000)


class ReviewOut(ReviewIn):
    id: str
    productId: str
    userId: Optional[str] = None
    reviewerName: Optional[str] = None
    createdAt: Optional[str] = None


@router.get("/{product_id}", response_model=List[ReviewOut])
def reviews_list(product_id: str):
    return list_reviews(product_id)


@router.post("/{product_id}", response_model=ReviewOut)
def reviews_create(product_id: str, body: ReviewIn, user: CurrentUser = Depends(current_user)):
    try:
        return create_review(user.uid, product_id, body.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
