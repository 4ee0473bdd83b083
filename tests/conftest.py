"""Pytest fixtures for shopapi tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shopapi.data.database import Database
from shopapi.data.models import CartItemModel, CategoryModel, ProductModel, UserModel
from shopapi.main import create_app
from shopapi.utils.security import hash_password


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database file per test."""
    db = Database(f"sqlite:///{tmp_path / 'shop.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    app = create_app(database=database, seed_data=False)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_category(database):
    def _make(name="Electronics", slug="electronics", description=None):
        with database.session() as s:
            category = CategoryModel(name=name, slug=slug, description=description)
            s.add(category)
            s.commit()
            return category.id

    return _make


@pytest.fixture
def make_product(database):
    def _make(name="Widget", price="10.00", stock=10, category_id=None, description=None):
        with database.session() as s:
            product = ProductModel(
                name=name,
                description=description,
                price=Decimal(price),
                stock=stock,
                category_id=category_id,
            )
            s.add(product)
            s.commit()
            return product.id

    return _make


@pytest.fixture
def make_user(database):
    def _make(username="jane", email="jane@example.com", password="secret123", role="customer"):
        with database.session() as s:
            user = UserModel(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=role,
            )
            s.add(user)
            s.commit()
            return user.id

    return _make


@pytest.fixture
def add_line(database):
    """Put a cart line straight into storage."""

    def _add(session_id, product_id, quantity=1):
        with database.session() as s:
            line = CartItemModel(session_id=session_id, product_id=product_id, quantity=quantity)
            s.add(line)
            s.commit()
            return line.id

    return _add


@pytest.fixture
def read_product(database):
    def _read(product_id):
        with database.session() as s:
            return s.get(ProductModel, product_id)

    return _read


@pytest.fixture
def admin_headers(client, make_user):
    make_user(username="boss", email="boss@example.com", password="adminpass", role="admin")
    response = client.post("/api/auth/login", json={"email": "boss@example.com", "password": "adminpass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def customer_headers(client, make_user):
    make_user(username="jane", email="jane@example.com", password="secret123")
    response = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
