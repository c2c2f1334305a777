from __future__ import annotations
from datetime import date
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..services.bookings import cancel_booking, create_booking, list_user_bookings
from .auth import CurrentUser, current_user

router = APIRouter(prefix="/bookings", tags=["bookings"])


class BookingIn(BaseModel):
    productId: str
    quantity: int = Field(1, ge=1)
    pickupDate: Optional[date] = None
    notes: Optional[str] = Field("", max_length=1000)


class BookedProductOut(BaseModel):
    name: Optional[str] = None
    imageUrl: Optional[str] = None
    brand: Optional[str] = None


class BookingOut(BaseModel):
    id: str
    productId: str
    quantity: int
    pickupDate: str
    totalAmount: float
    notes: Optional[str] = ""
    status: str
    createdAt: Optional[str] = None
    product: Optional[BookedProductOut] = None


@router.post("", response_model=BookingOut, status_code=201)
def booking_create(body: BookingIn, user: CurrentUser = Depends(current_user)):
    return create_booking(user.uid, body.productId, body.quantity, body.pickupDate, body.notes)


@router.get("", response_model=List[BookingOut])
def booking_list(user: CurrentUser = Depends(current_user)):
    return list_user_bookings(user.uid)


@router.post("/{booking_id}/cancel", response_model=BookingOut)
def booking_cancel(booking_id: str, user: CurrentUser = Depends(current_user)):
    booking = cancel_booking(user.uid, booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="booking not found")
    return booking
