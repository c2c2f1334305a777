# storefront/routes/products.py
from __future__ import annotations
from typing import Optional, Dict, Any, List
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ..services.products import (
    filter_products,
    get_product,
    list_facets,
    list_products,
    stock_badge,
)
from ..services.reviews import average_rating, list_reviews
from .reviews import ReviewOut

router = APIRouter(prefix="/products", tags=["products"])


# ---- Pydantic models ---------------------------------------------------------
class ProductIn(BaseModel):
    name: str
    description: Optional[str] = ""
    price: float = Field(..., ge=0)
    stockQuantity: int = Field(..., ge=0)
    size: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    imageUrl: Optional[str] = None
    isActive: Optional[bool] = True


class ProductPatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stockQuantity: Optional[int] = Field(None, ge=0)
    size: Optional[str] = None
    brand: Optional[str] = None
    color: Optional[str] = None
    imageUrl: Optional[str] = None
    isActive: Optional[bool] = None


class ProductOut(ProductIn):
    id: str
    stock: str = "in_stock"     # in_stock | low_stock | out_of_stock
    createdAt: Optional[str] = None


class ProductDetailOut(ProductOut):
    averageRating: float = 0.0
    reviews: List[ReviewOut] = []


class FacetsOut(BaseModel):
    brands: List[str]
    sizes: List[str]


class ShopOut(BaseModel):
    products: List[ProductOut]
    facets: FacetsOut


# ---- Helpers -----------------------------------------------------------------
def product_out(p: Dict[str, Any]) -> ProductOut:
    return ProductOut(**{**p, "stock": stock_badge(p)})


# ---- Routes ------------------------------------------------------------------
# GET /products
@router.get("", response_model=ShopOut)
def list_products_endpoint(
    search: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    price_range: Optional[str] = Query(None, alias="priceRange"),
):
    # facets come from the whole active catalog, not the filtered view
    everything = list_products()
    shown = filter_products(everything, search=search, brand=brand, size=size, price_range=price_range)
    return ShopOut(
        products=[product_out(p) for p in shown],
        facets=FacetsOut(**list_facets(everything)),
    )


# GET /products/{id}
@router.get("/{product_id}", response_model=ProductDetailOut)
def get_product_endpoint(product_id: str):
    p = get_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    reviews = list_reviews(product_id)
    return ProductDetailOut(
        **product_out(p).model_dump(),
        averageRating=average_rating(reviews),
        reviews=[ReviewOut(**r) for r in reviews],
    )

