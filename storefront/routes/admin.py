from __future__ import annotations
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..schemas.orders import OrderOut
from ..services.orders import list_orders
from ..services.roles import register_cashier
from .auth import CurrentUser, admin_only

router = APIRouter(prefix="/admin", tags=["admin"])


class CashierIn(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    fullName: str = Field(..., min_length=1)


@router.get("/orders", response_model=List[OrderOut])
def all_orders(status: Optional[str] = Query(None),
               user: CurrentUser = Depends(admin_only)):
    """
    Every order with its customer, newest first. Pass ?status=pending to narrow.
    """
    return list_orders(status=status)


@router.post("/cashiers", status_code=201)
def create_cashier(body: CashierIn, user: CurrentUser = Depends(admin_only)):
    """
    Register a staff account with the cashier role.
    """
    return register_cashier(body.email, body.password, body.fullName)
