# shopapi/services/catalog_service.py
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopapi.data.models.category import CategoryModel
from shopapi.data.models.product import ProductModel
from shopapi.domain.errors import Conflict, NotFound, ValidationError
from shopapi.domain.schemas import (
    CategoryIn,
    CategoryOut,
    ProductCreate,
    ProductFilter,
    ProductOut,
    ProductUpdate,
)
from shopapi.repos.category_repo import CategoryRepo
from shopapi.repos.product_repo import ProductRepo
from shopapi.utils.logging import get_logger

logger = get_logger(__name__)

_PRODUCT_FIELDS = ("name", "description", "price", "stock", "category_id", "image_url")


def merge_product_update(existing: Dict[str, Any], patch: ProductUpdate) -> Dict[str, Any]:
    """
    Scala aktualne pola produktu z czesciowa aktualizacja.
    Pole pominiete albo wyslane jako null zachowuje poprzednia wartosc.
    """
    changes = {
        field: value
        for field, value in patch.model_dump(exclude_unset=True).items()
        if value is not None
    }
    return {**existing, **changes}


def _product_out(row) -> ProductOut:
    product, category_name, category_slug = row
    return ProductOut(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock=product.stock,
        category_id=product.category_id,
        category_name=category_name,
        category_slug=category_slug,
        image_url=product.image_url,
        created_at=product.created_at,
    )


class CatalogService:
    """
    Katalog: produkty i kategorie.
    query - lista z filtrami, pojedynczy produkt
    commands (admin) - create/update/delete
    """

    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.categories = CategoryRepo(db)

    # query
    def list_products(self, filters: ProductFilter) -> List[ProductOut]:
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise ValidationError("minPrice cannot be greater than maxPrice")

        return [_product_out(row) for row in self.products.list_products(filters)]

    def get_product(self, product_id: int) -> ProductOut:
        row = self.products.get_product_row(product_id)
        if not row:
            raise NotFound("Product not found")
        return _product_out(row)

    def list_categories(self) -> List[CategoryOut]:
        return [CategoryOut.model_validate(c) for c in self.categories.list_categories()]

    # commands
    def _check_category(self, category_id: int | None):
        if category_id is not None and not self.categories.get_category(category_id):
            raise NotFound("Category not found")

    def create_product(self, payload: ProductCreate) -> ProductOut:
        self._check_category(payload.category_id)

        created = self.products.save_product(ProductModel(**payload.model_dump()))
        logger.info(f"Created product {created.id} ({created.name})")
        return self.get_product(created.id)

    def update_product(self, product_id: int, patch: ProductUpdate) -> ProductOut:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        current = {field: getattr(product, field) for field in _PRODUCT_FIELDS}
        merged = merge_product_update(current, patch)
        if merged["category_id"] != current["category_id"]:
            self._check_category(merged["category_id"])

        for field, value in merged.items():
            setattr(product, field, value)
        self.products.save_product(product)

        logger.info(f"Updated product {product_id}: {sorted(k for k in merged if merged[k] != current[k])}")
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> None:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        # zamowienia nie sa usuwane, wiec ich linie musza wskazywac na produkt
        if self.products.is_referenced_by_orders(product_id):
            raise Conflict("Product is referenced by existing orders and cannot be deleted")

        self.products.delete_product(product)
        logger.info(f"Deleted product {product_id}")

    def create_category(self, payload: CategoryIn) -> CategoryOut:
        if self.categories.exists_name_or_slug(payload.name, payload.slug):
            raise Conflict("Category name or slug already exists")

        try:
            created = self.categories.create_category(CategoryModel(**payload.model_dump()))
        except IntegrityError:
            self.categories.rollback()
            raise Conflict("Category name or slug already exists")

        logger.info(f"Created category {created.id} ({created.slug})")
        return CategoryOut.model_validate(created)
