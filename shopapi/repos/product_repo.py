# shopapi/repos/product_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from shopapi.data.models.category import CategoryModel
from shopapi.data.models.order_item import OrderItemModel
from shopapi.data.models.product import ProductModel
from shopapi.domain.schemas import ProductFilter


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_category(self):
        #produkt + zdenormalizowana nazwa/slug kategorii
        return (
            select(
                ProductModel,
                CategoryModel.name.label("category_name"),
                CategoryModel.slug.label("category_slug"),
            )
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
        )

    def list_products(self, filters: ProductFilter):
        stmt = self._with_category()

        if filters.category:
            stmt = stmt.where(CategoryModel.slug == filters.category)
        if filters.search:
            stmt = stmt.where(func.lower(ProductModel.name).contains(filters.search.lower(), autoescape=True))
        if filters.min_price is not None:
            stmt = stmt.where(ProductModel.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(ProductModel.price <= filters.max_price)

        #najnowsze pierwsze
        stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        return self.db.execute(stmt).all()

    def get_product_row(self, product_id: int):
        return self.db.execute(
            self._with_category().where(ProductModel.id == product_id)
        ).first()

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_stock(self, product_id: int) -> int | None:
        return self.db.execute(
            select(ProductModel.stock).where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def is_referenced_by_orders(self, product_id: int) -> bool:
        found = self.db.execute(
            select(OrderItemModel.id).where(OrderItemModel.product_id == product_id).limit(1)
        ).first()
        return found is not None

    def save_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        Atomowe "zdejmij ze stanu jesli stock >= quantity".
        Zwraca rowcount - 0 oznacza ze ktos inny wykupil towar w miedzyczasie.
        Nie robi commita, checkout commituje calosc.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
