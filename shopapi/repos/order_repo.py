# shopapi/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from shopapi.data.models.order import OrderModel
from shopapi.data.models.order_item import OrderItemModel
from shopapi.data.models.product import ProductModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # flush zeby dostac id, commit robi checkout
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: int | None = None, status: str | None = None) -> list[OrderModel]:
        stmt = select(OrderModel)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        if status:
            stmt = stmt.where(OrderModel.status == status)
        stmt = stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_order_lines(self, order_id: int):
        stmt = (
            select(
                OrderItemModel.id,
                OrderItemModel.product_id,
                OrderItemModel.quantity,
                OrderItemModel.unit_price,
                ProductModel.name.label("product_name"),
                ProductModel.image_url,
            )
            .join(ProductModel, OrderItemModel.product_id == ProductModel.id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id)
        )
        return self.db.execute(stmt).all()

    def update_order_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        self.db.commit()
        self.db.refresh(order)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
