# storefront/schemas/orders.py
from typing import List, Optional
from pydantic import BaseModel


class OrderLineOut(BaseModel):
    productId: str
    quantity: int
    unitPrice: float
    lineTotal: float


class AmountsOut(BaseModel):
    subtotal: float
    discount: float
    total: float


class CustomerOut(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class OrderOut(BaseModel):
    id: str
    userId: Optional[str] = None
    status: str
    customer: Optional[CustomerOut] = None
    lines: List[OrderLineOut] = []
    amounts: AmountsOut
    approvedBy: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class TotalsOut(BaseModel):
    subtotal: float
    discountRate: float
    discountAmount: float
    finalAmount: float
    itemCount: int


class CheckoutOut(TotalsOut):
    orderId: str
    status: str


class CartLineOut(BaseModel):
    productId: str
    name: Optional[str] = None
    imageUrl: Optional[str] = None
    unitPrice: float
    quantity: int
    stockQuantity: int
    lineTotal: float
    canIncrement: bool


class CartOut(BaseModel):
    lines: List[CartLineOut]
    totals: TotalsOut
