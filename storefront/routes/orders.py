# storefront/routes/orders.py
from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from ..schemas.orders import OrderOut
from ..services.orders import get_order, list_user_orders
from ..services.roles import CUSTOMER
from .auth import CurrentUser, current_user


router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderOut])
def my_orders(user: CurrentUser = Depends(current_user)):
    """Order history for the profile page."""
    return list_user_orders(user.uid)


@router.get("/{order_id}", response_model=OrderOut)
def order_detail(order_id: str, user: CurrentUser = Depends(current_user)):
    order = get_order(order_id)
    # customers only see their own orders; staff see any
    if not order or (user.role == CUSTOMER and order["userId"] != user.uid):
        raise HTTPException(status_code=404, detail="order not found")
    return order
