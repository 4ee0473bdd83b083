# shopapi/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shopapi.api.deps import RowId, get_optional_user, get_session_identity, require_admin
from shopapi.data.database import get_db
from shopapi.domain.errors import ShopError
from shopapi.domain.schemas import (
    MAX_INT,
    AuthUser,
    CheckoutIn,
    CheckoutOut,
    OrderDetailOut,
    OrderOut,
    OrderStatusIn,
    OrderStatusOut,
)
from shopapi.domain.session import SessionIdentity
from shopapi.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: Optional[CheckoutIn] = Body(None),
    session: SessionIdentity = Depends(get_session_identity),
    user: Optional[AuthUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Checkout - tworzy zamowienie z koszyka sesji.
    user_id z body, a jak go nie ma to z tokena (jesli jest).
    """
    user_id = payload.user_id if payload and payload.user_id else None
    if user_id is None and user is not None:
        user_id = user.id

    svc = get_service(db)
    try:
        return svc.checkout(session, user_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user_id: Optional[int] = Query(None, gt=0, le=MAX_INT),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_orders(user_id, status)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(order_id: RowId, db: Session = Depends(get_db)):
    """Order with its line items."""
    svc = get_service(db)
    try:
        return svc.get_order(order_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch(
    "/{order_id}/status",
    response_model=OrderStatusOut,
    dependencies=[Depends(require_admin)],
)
def update_status(order_id: RowId, payload: OrderStatusIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        order = svc.update_order_status(order_id, payload.status)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return OrderStatusOut(message="Order status updated", order_id=order.id, status=order.status)
