# shopapi/services/order_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopapi.data.models.order import OrderModel, ORDER_STATUSES
from shopapi.data.models.order_item import OrderItemModel
from shopapi.domain.errors import EmptyCart, InsufficientStock, NotFound, ValidationError
from shopapi.domain.schemas import CheckoutOut, OrderDetailOut, OrderLineOut, OrderOut
from shopapi.domain.session import SessionIdentity
from shopapi.repos.cart_repo import CartRepo
from shopapi.repos.order_repo import OrderRepo
from shopapi.repos.product_repo import ProductRepo
from shopapi.repos.user_repo import UserRepo
from shopapi.services.cart_service import round_money
from shopapi.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Jedyne miejsce ktore w jednej transakcji dotyka koszyka i katalogu.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.user_repo = UserRepo(db)

    def checkout(self, session: SessionIdentity, user_id: int | None = None) -> CheckoutOut:
        """
        Use Case: zamiana koszyka sesji w zamowienie.

        1. Wczytuje linie koszyka z aktualna cena i stanem
        2. Sprawdza stan magazynu dla kazdej linii (pierwsza za duza przerywa)
        3. Liczy total
        4. W jednej transakcji: zamowienie, linie z cena z kroku 1,
           warunkowe zdjecie ze stanu, czyszczenie koszyka
        """
        if user_id is not None and not self.user_repo.get_user(user_id):
            raise NotFound("User not found")

        lines = self.cart_repo.get_cart_lines(session.value)
        if not lines:
            raise EmptyCart()

        # nic nie jest modyfikowane dopoki wszystkie linie nie przejda
        for line in lines:
            if line.quantity > line.stock:
                logger.warning(
                    f"Checkout {session} odrzucony: {line.name} "
                    f"zadane {line.quantity}, dostepne {line.stock}"
                )
                raise InsufficientStock(line.name, line.stock)

        total = sum((line.price * line.quantity for line in lines), Decimal("0.00"))

        try:
            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    status="pending",
                    total=total,
                )
            )
            order_id = order.id

            for line in lines:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order_id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        unit_price=line.price,
                    )
                )

                # update ... where stock >= quantity
                # 0 rows = inny checkout wykupil towar po naszym odczycie
                rowcount = self.product_repo.decrement_stock(line.product_id, line.quantity)
                if rowcount == 0:
                    self.repo.rollback()
                    available = self.product_repo.get_stock(line.product_id) or 0
                    logger.warning(
                        f"Checkout {session}: stan {line.name} zmienil sie w trakcie, dostepne {available}"
                    )
                    raise InsufficientStock(line.name, available)

            self.cart_repo.clear_session(session.value)
            self.repo.commit()

        except SQLAlchemyError:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} created from cart {session}, total {round_money(total)}")

        return CheckoutOut(
            message="Order placed successfully",
            order_id=order_id,
            total=round_money(total),
        )

    def list_orders(self, user_id: int | None = None, status: str | None = None) -> List[OrderOut]:
        # nieznany status to zwykly filtr bez wynikow
        return [OrderOut.model_validate(o) for o in self.repo.list_orders(user_id, status)]

    def get_order(self, order_id: int) -> OrderDetailOut:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFound("Order not found")

        items = [
            OrderLineOut(
                id=line.id,
                product_id=line.product_id,
                product_name=line.product_name,
                image_url=line.image_url,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=line.unit_price * line.quantity,
            )
            for line in self.repo.get_order_lines(order_id)
        ]

        return OrderDetailOut(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total=order.total,
            created_at=order.created_at,
            items=items,
        )

    def update_order_status(self, order_id: int, status: str) -> OrderOut:
        if status not in ORDER_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        # ten sam status ponownie - nic do zrobienia
        if order.status == status:
            return OrderOut.model_validate(order)

        previous = order.status
        updated = self.repo.update_order_status(order, status)
        logger.info(f"Order {order_id} status {previous} -> {status}")
        return OrderOut.model_validate(updated)
