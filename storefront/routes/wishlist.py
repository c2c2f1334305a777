from __future__ import annotations
from fastapi import APIRouter, Depends

from ..services.wishlist import toggle_wishlist, wishlist_products
from .auth import CurrentUser, current_user
from .products import product_out

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("")
def wishlist_list(user: CurrentUser = Depends(current_user)):
    products = [product_out(p) for p in wishlist_products(user.uid)]
    return {"productIds": [p.id for p in products], "products": products}


@router.post("/{product_id}")
def wishlist_toggle(product_id: str, user: CurrentUser = Depends(current_user)):
    added = toggle_wishlist(user.uid, product_id)
    return {"productId": product_id, "inWishlist": added}
