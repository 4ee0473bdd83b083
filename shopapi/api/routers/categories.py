# shopapi/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopapi.api.deps import require_admin
from shopapi.data.database import get_db
from shopapi.domain.errors import Conflict
from shopapi.domain.schemas import CategoryCreatedOut, CategoryIn, CategoryOut
from shopapi.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.post(
    "",
    response_model=CategoryCreatedOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        created = svc.create_category(payload)
    except Conflict as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return CategoryCreatedOut(message="Category created", category_id=created.id)
