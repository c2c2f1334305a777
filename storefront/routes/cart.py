# storefront/routes/cart.py
from __future__ import annotations
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..schemas.orders import CartLineOut, CartOut, CheckoutOut, TotalsOut
from ..services.cart import (
    CartState,
    add_to_cart,
    cart_lines,
    change_quantity,
    clear_cart,
    load_cart,
    remove_from_cart,
)
from ..services.orders import checkout
from ..services.pricing import compute_totals
from .auth import CurrentUser, current_user

router = APIRouter(prefix="/cart", tags=["cart"])


class AddBody(BaseModel):
    productId: str


class QuantityBody(BaseModel):
    # +1 / -1 from the cart page buttons
    delta: int = Field(..., ge=-99, le=99)


def _cart_out(cart: CartState) -> CartOut:
    lines, products = cart_lines(cart)
    out = []
    for line, p in zip(lines, products):
        out.append(CartLineOut(
            productId=line.product_id,
            name=p.get("name"),
            imageUrl=p.get("imageUrl"),
            unitPrice=line.unit_price,
            quantity=line.quantity,
            stockQuantity=line.stock,
            lineTotal=line.line_total,
            canIncrement=line.quantity < line.stock,
        ))
    return CartOut(lines=out, totals=TotalsOut(**compute_totals(lines).as_dict()))


@router.get("", response_model=CartOut)
def get_cart(user: CurrentUser = Depends(current_user)):
    return _cart_out(load_cart(user.uid))


@router.post("/items", response_model=CartOut)
def add_item(body: AddBody, user: CurrentUser = Depends(current_user)):
    return _cart_out(add_to_cart(user.uid, body.productId))


@router.patch("/items/{product_id}", response_model=CartOut)
def update_item(product_id: str, body: QuantityBody, user: CurrentUser = Depends(current_user)):
    return _cart_out(change_quantity(user.uid, product_id, body.delta))


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: str, user: CurrentUser = Depends(current_user)):
    return _cart_out(remove_from_cart(user.uid, product_id))


@router.delete("")
def empty_cart(user: CurrentUser = Depends(current_user)):
    clear_cart(user.uid)
    return {"ok": True}


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout_cart(user: CurrentUser = Depends(current_user)):
    return checkout(user.uid)
