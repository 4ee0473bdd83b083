"""Tests for the checkout transaction (OrderService.checkout)."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from shopapi.data.models import CartItemModel, OrderItemModel, OrderModel, ProductModel
from shopapi.domain.errors import EmptyCart, InsufficientStock, NotFound
from shopapi.domain.session import SessionIdentity
from shopapi.repos.cart_repo import CartRepo
from shopapi.services.order_service import OrderService

SESSION = SessionIdentity(value="checkout-session")


def count(database, model):
    with database.session() as s:
        return s.execute(select(func.count()).select_from(model)).scalar_one()


def cart_quantities(database, session_id):
    with database.session() as s:
        rows = s.execute(
            select(CartItemModel.product_id, CartItemModel.quantity).where(
                CartItemModel.session_id == session_id
            )
        ).all()
    return {product_id: quantity for product_id, quantity in rows}


class TestSuccessfulCheckout:
    def test_two_products_total_and_stock(self, database, db_session, make_product, add_line, read_product):
        a = make_product(name="Product A", price="10.00", stock=10)
        b = make_product(name="Product B", price="5.00", stock=4)
        add_line(SESSION.value, a, 2)
        add_line(SESSION.value, b, 1)

        result = OrderService(db_session).checkout(SESSION)

        assert result.total == Decimal("25.00")
        assert read_product(a).stock == 8
        assert read_product(b).stock == 3

        order = db_session.get(OrderModel, result.order_id)
        assert order.status == "pending"
        assert order.total == Decimal("25.00")
        assert order.user_id is None

    def test_cart_is_emptied(self, database, db_session, make_product, add_line):
        a = make_product(stock=5)
        add_line(SESSION.value, a, 3)

        OrderService(db_session).checkout(SESSION)

        assert cart_quantities(database, SESSION.value) == {}

    def test_other_sessions_untouched(self, database, db_session, make_product, add_line):
        a = make_product(stock=5)
        add_line(SESSION.value, a, 1)
        add_line("someone-else", a, 2)

        OrderService(db_session).checkout(SESSION)

        assert cart_quantities(database, "someone-else") == {a: 2}

    def test_order_lines_snapshot_price(self, database, db_session, make_product, add_line):
        a = make_product(name="Lamp", price="19.99", stock=5)
        add_line(SESSION.value, a, 2)

        result = OrderService(db_session).checkout(SESSION)

        # cena w katalogu zmienia sie po zakupie
        with database.session() as s:
            s.execute(update(ProductModel).where(ProductModel.id == a).values(price=Decimal("99.00")))
            s.commit()

        detail = OrderService(db_session).get_order(result.order_id)
        assert len(detail.items) == 1
        assert detail.items[0].unit_price == Decimal("19.99")
        assert detail.items[0].subtotal == Decimal("39.98")
        assert detail.items[0].product_name == "Lamp"
        assert detail.total == Decimal("39.98")

    def test_user_reference_is_stored(self, db_session, make_product, make_user, add_line):
        user_id = make_user()
        a = make_product(stock=5)
        add_line(SESSION.value, a, 1)

        result = OrderService(db_session).checkout(SESSION, user_id=user_id)

        assert db_session.get(OrderModel, result.order_id).user_id == user_id

    def test_quantity_equal_to_stock_is_allowed(self, db_session, make_product, add_line, read_product):
        a = make_product(stock=3)
        add_line(SESSION.value, a, 3)

        OrderService(db_session).checkout(SESSION)

        assert read_product(a).stock == 0

    def test_total_is_rounded(self, db_session, make_product, add_line):
        a = make_product(price="0.10", stock=10)
        b = make_product(price="0.20", stock=10)
        add_line(SESSION.value, a, 1)
        add_line(SESSION.value, b, 1)

        result = OrderService(db_session).checkout(SESSION)

        assert result.total == Decimal("0.30")


class TestRejectedCheckout:
    def test_empty_cart(self, database, db_session):
        with pytest.raises(EmptyCart):
            OrderService(db_session).checkout(SESSION)

        assert count(database, OrderModel) == 0

    def test_insufficient_stock_changes_nothing(self, database, db_session, make_product, add_line, read_product):
        a = make_product(name="Plenty", stock=10)
        b = make_product(name="Scarce", stock=1)
        add_line(SESSION.value, a, 2)
        add_line(SESSION.value, b, 2)

        with pytest.raises(InsufficientStock) as exc_info:
            OrderService(db_session).checkout(SESSION)

        assert exc_info.value.product_name == "Scarce"
        assert exc_info.value.available == 1
        assert exc_info.value.message == 'Insufficient stock for "Scarce". Available: 1'

        assert count(database, OrderModel) == 0
        assert count(database, OrderItemModel) == 0
        assert read_product(a).stock == 10
        assert read_product(b).stock == 1
        assert cart_quantities(database, SESSION.value) == {a: 2, b: 2}

    def test_unknown_user(self, database, db_session, make_product, add_line):
        a = make_product(stock=5)
        add_line(SESSION.value, a, 1)

        with pytest.raises(NotFound):
            OrderService(db_session).checkout(SESSION, user_id=999)

        assert count(database, OrderModel) == 0
        assert cart_quantities(database, SESSION.value) == {a: 1}

    def test_stock_taken_between_read_and_write(
        self, database, db_session, make_product, add_line, read_product, monkeypatch
    ):
        a = make_product(name="Hot item", stock=5)
        add_line(SESSION.value, a, 3)

        original = CartRepo.get_cart_lines

        def read_then_competitor_buys(self, session_id):
            lines = original(self, session_id)
            # inny checkout zdejmuje 4 sztuki po naszym odczycie
            with database.session() as other:
                other.execute(update(ProductModel).where(ProductModel.id == a).values(stock=1))
                other.commit()
            return lines

        monkeypatch.setattr(CartRepo, "get_cart_lines", read_then_competitor_buys)

        with pytest.raises(InsufficientStock) as exc_info:
            OrderService(db_session).checkout(SESSION)

        assert exc_info.value.available == 1
        assert read_product(a).stock == 1
        assert count(database, OrderModel) == 0
        assert count(database, OrderItemModel) == 0
        assert cart_quantities(database, SESSION.value) == {a: 3}

    def test_storage_failure_rolls_back(
        self, database, db_session, make_product, add_line, read_product, monkeypatch
    ):
        a = make_product(stock=5)
        add_line(SESSION.value, a, 2)

        def broken_clear(self, session_id):
            raise OperationalError("DELETE FROM cart_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(CartRepo, "clear_session", broken_clear)

        with pytest.raises(OperationalError):
            OrderService(db_session).checkout(SESSION)

        assert count(database, OrderModel) == 0
        assert count(database, OrderItemModel) == 0
        assert read_product(a).stock == 5
        assert cart_quantities(database, SESSION.value) == {a: 2}

    def test_second_checkout_of_same_session_is_empty(self, db_session, make_product, add_line):
        a = make_product(stock=5)
        add_line(SESSION.value, a, 1)
        svc = OrderService(db_session)

        svc.checkout(SESSION)

        with pytest.raises(EmptyCart):
            svc.checkout(SESSION)
