from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from ..schemas.orders import OrderOut
from ..services.orders import PENDING, approve_order, list_orders, reject_order
from ..services.products import create_product, update_product
from .auth import CurrentUser, staff_only
from .products import ProductIn, ProductOut, ProductPatch, product_out

router = APIRouter(prefix="/cashier", tags=["cashier"])


@router.get("/orders", response_model=List[OrderOut])
def pending_orders(user: CurrentUser = Depends(staff_only)):
    """Approval queue: pending orders, newest first."""
    return list_orders(status=PENDING)


@router.post("/orders/{order_id}/approve", response_model=OrderOut)
def approve(order_id: str, user: CurrentUser = Depends(staff_only)):
    order = approve_order(order_id, user.uid)
    if order is None:
        raise HTTPException(status_code=404, detail="order not found")
    return order


@router.post("/orders/{order_id}/reject", response_model=OrderOut)
def reject(order_id: str, user: CurrentUser = Depends(staff_only)):
    order = reject_order(order_id, user.uid)
    if order is None:
        raise HTTPException(status_code=404, detail="order not found")
    return order


@router.post("/products", response_model=ProductOut, status_code=201)
def add_product(payload: ProductIn, user: CurrentUser = Depends(staff_only)):
    return product_out(create_product(payload.model_dump(), created_by=user.uid))


@router.patch("/products/{product_id}", response_model=ProductOut)
def edit_product(product_id: str, payload: ProductPatch, user: CurrentUser = Depends(staff_only)):
    updated = update_product(product_id, payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="product not found")
    return product_out(updated)
