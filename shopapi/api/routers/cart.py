#shopapi/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopapi.api.deps import RowId, get_session_identity
from shopapi.data.database import get_db
from shopapi.domain.errors import ShopError
from shopapi.domain.schemas import CartAddIn, CartAddedOut, CartOut, MessageOut
from shopapi.domain.session import SessionIdentity
from shopapi.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    session: SessionIdentity = Depends(get_session_identity),
    db: Session = Depends(get_db),
):
    """Cart lines for the x-session-id header (defaults to "default-session")."""
    return get_service(db).list_cart(session)


@router.post("", response_model=CartAddedOut, status_code=201)
def add_item(
    payload: CartAddIn,
    session: SessionIdentity = Depends(get_session_identity),
    db: Session = Depends(get_db),
):
    # stary format {"item": "..."} - nic nie zapisuje
    if payload.item and not payload.product_id:
        return CartAddedOut(message="Item added!", current_cart=[payload.item])

    if not payload.product_id:
        raise HTTPException(status_code=400, detail="product_id is required")

    svc = get_service(db)
    try:
        lines = svc.add_to_cart(session, payload.product_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return CartAddedOut(message="Item added", current_cart=lines)


@router.delete("/{line_id}", response_model=MessageOut)
def remove_item(
    line_id: RowId,
    session: SessionIdentity = Depends(get_session_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_cart_line(session, line_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Item removed from cart")
