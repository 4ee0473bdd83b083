# shopapi/api/routers/products.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shopapi.api.deps import RowId, require_admin
from shopapi.data.database import get_db
from shopapi.domain.errors import ShopError
from shopapi.domain.schemas import (
    MessageOut,
    ProductCreate,
    ProductFilter,
    ProductMessageOut,
    ProductOut,
    ProductUpdate,
)
from shopapi.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/products", tags=["Products"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("", response_model=List[ProductOut])
def list_products(
    category: Optional[str] = Query(None, description="Filter by category slug (e.g. electronics)"),
    search: Optional[str] = Query(None, description="Search by product name"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    db: Session = Depends(get_db),
):
    """Products newest first, with optional filters."""
    filters = ProductFilter(
        category=category or None,
        search=search or None,
        min_price=min_price,
        max_price=max_price,
    )
    svc = get_service(db)
    try:
        return svc.list_products(filters)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: RowId, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "",
    response_model=ProductMessageOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        product = svc.create_product(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ProductMessageOut(message="Product created", product=product)


@router.put(
    "/{product_id}",
    response_model=ProductMessageOut,
    dependencies=[Depends(require_admin)],
)
def update_product(product_id: RowId, payload: ProductUpdate, db: Session = Depends(get_db)):
    """Partial update - fields not sent keep their current value."""
    svc = get_service(db)
    try:
        product = svc.update_product(product_id, payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ProductMessageOut(message="Product updated", product=product)


@router.delete(
    "/{product_id}",
    response_model=MessageOut,
    dependencies=[Depends(require_admin)],
)
def delete_product(product_id: RowId, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.delete_product(product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Product deleted successfully")
