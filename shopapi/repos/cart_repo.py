# shopapi/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopapi.data.models.cart_item import CartItemModel
from shopapi.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_lines(self, session_id: str):
        """Linie koszyka z aktualna cena, stanem i nazwa produktu, najnowsze pierwsze."""
        stmt = (
            select(
                CartItemModel.id,
                CartItemModel.product_id,
                CartItemModel.quantity,
                CartItemModel.added_at,
                ProductModel.name,
                ProductModel.price,
                ProductModel.stock,
                ProductModel.image_url,
            )
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.session_id == session_id)
            .order_by(CartItemModel.added_at.desc(), CartItemModel.id.desc())
        )
        return self.db.execute(stmt).all()

    def get_cart_item(self, session_id: str, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.session_id == session_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_line_for_session(self, line_id: int, session_id: str) -> CartItemModel | None:
        #linia z innej sesji traktowana jak nieistniejaca
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == line_id,
                CartItemModel.session_id == session_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_session(self, session_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.session_id == session_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
