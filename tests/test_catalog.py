"""Tests for products and categories."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from shopapi.domain.schemas import ProductUpdate
from shopapi.services.catalog_service import merge_product_update


@pytest.fixture
def catalog(make_category, make_product):
    electronics = make_category("Electronics", "electronics")
    books = make_category("Books", "books")
    ids = SimpleNamespace(
        electronics=electronics,
        books=books,
        headphones=make_product("Wireless Headphones", "129.99", 50, electronics),
        hub=make_product("USB-C Hub", "39.99", 100, electronics),
        novel=make_product("The Art of Code", "34.99", 150, books),
        loose=make_product("Loose Screw", "0.50", 1000),
    )
    return ids


class TestListProducts:
    def test_newest_first_with_category_fields(self, client, catalog):
        data = client.get("/api/products").json()

        assert [p["id"] for p in data] == [catalog.loose, catalog.novel, catalog.hub, catalog.headphones]
        headphones = data[-1]
        assert headphones["category_name"] == "Electronics"
        assert headphones["category_slug"] == "electronics"
        assert headphones["price"] == 129.99
        assert data[0]["category_name"] is None

    def test_filter_by_category_slug(self, client, catalog):
        data = client.get("/api/products", params={"category": "electronics"}).json()
        assert {p["id"] for p in data} == {catalog.headphones, catalog.hub}
        assert all(p["category_slug"] == "electronics" for p in data)

    def test_unknown_category_gives_empty_list(self, client, catalog):
        assert client.get("/api/products", params={"category": "garden"}).json() == []

    def test_search_is_case_insensitive(self, client, catalog):
        data = client.get("/api/products", params={"search": "usb"}).json()
        assert [p["name"] for p in data] == ["USB-C Hub"]

    def test_price_range(self, client, catalog):
        data = client.get("/api/products", params={"minPrice": "30", "maxPrice": "40"}).json()
        assert {p["id"] for p in data} == {catalog.hub, catalog.novel}
        assert all(30 <= p["price"] <= 40 for p in data)

    def test_min_price_only(self, client, catalog):
        data = client.get("/api/products", params={"minPrice": 100}).json()
        assert [p["id"] for p in data] == [catalog.headphones]

    def test_malformed_price_rejected(self, client, catalog):
        response = client.get("/api/products", params={"minPrice": "cheap"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_negative_price_rejected(self, client, catalog):
        response = client.get("/api/products", params={"maxPrice": "-1"})
        assert response.status_code == 400

    def test_inverted_range_rejected(self, client, catalog):
        response = client.get("/api/products", params={"minPrice": 50, "maxPrice": 10})
        assert response.status_code == 400


class TestGetProduct:
    def test_found(self, client, catalog):
        response = client.get(f"/api/products/{catalog.novel}")
        assert response.status_code == 200
        assert response.json()["name"] == "The Art of Code"
        assert response.json()["category_slug"] == "books"

    def test_not_found(self, client):
        response = client.get("/api/products/12345")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}


class TestProductAdmin:
    def test_create(self, client, admin_headers, catalog):
        response = client.post(
            "/api/products",
            json={"name": "Gaming Mouse", "price": 49.99, "stock": 100, "category_id": catalog.electronics},
            headers=admin_headers,
        )

        assert response.status_code == 201
        product = response.json()["product"]
        assert response.json()["message"] == "Product created"
        assert product["price"] == 49.99
        assert product["stock"] == 100
        assert product["category_name"] == "Electronics"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Bad", "price": -1, "stock": 1},
            {"name": "Bad", "price": 1, "stock": -5},
            {"name": "Bad", "price": "abc", "stock": 1},
            {"price": 1, "stock": 1},
            {"name": "Bad", "stock": 1},
        ],
    )
    def test_create_validation(self, client, admin_headers, payload):
        response = client.post("/api/products", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert client.get("/api/products").json() == []

    def test_create_with_unknown_category(self, client, admin_headers):
        response = client.post(
            "/api/products",
            json={"name": "Orphan", "price": 1, "stock": 1, "category_id": 77},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_create_requires_token(self, client):
        response = client.post("/api/products", json={"name": "X", "price": 1, "stock": 1})
        assert response.status_code == 401

    def test_create_requires_admin(self, client, customer_headers):
        response = client.post(
            "/api/products", json={"name": "X", "price": 1, "stock": 1}, headers=customer_headers
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Admin access required"}

    def test_partial_update_keeps_other_fields(self, client, admin_headers, catalog):
        response = client.put(
            f"/api/products/{catalog.hub}", json={"price": 35.5}, headers=admin_headers
        )

        assert response.status_code == 200
        product = response.json()["product"]
        assert product["price"] == 35.5
        assert product["name"] == "USB-C Hub"
        assert product["stock"] == 100
        assert product["category_id"] == catalog.electronics

    def test_update_rejects_negative_stock(self, client, admin_headers, catalog):
        response = client.put(f"/api/products/{catalog.hub}", json={"stock": -1}, headers=admin_headers)
        assert response.status_code == 400
        assert client.get(f"/api/products/{catalog.hub}").json()["stock"] == 100

    def test_update_missing(self, client, admin_headers):
        response = client.put("/api/products/999", json={"name": "Ghost"}, headers=admin_headers)
        assert response.status_code == 404

    def test_delete(self, client, admin_headers, catalog):
        client.post("/api/cart", json={"product_id": catalog.loose})

        response = client.delete(f"/api/products/{catalog.loose}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert client.get(f"/api/products/{catalog.loose}").status_code == 404
        # linie koszyka znikaja razem z produktem
        assert client.get("/api/cart").json()["count"] == 0

    def test_delete_ordered_product_conflicts(self, client, admin_headers, catalog):
        client.post("/api/cart", json={"product_id": catalog.loose})
        client.post("/api/orders")

        response = client.delete(f"/api/products/{catalog.loose}", headers=admin_headers)

        assert response.status_code == 400
        assert client.get(f"/api/products/{catalog.loose}").status_code == 200

    def test_delete_missing(self, client, admin_headers):
        assert client.delete("/api/products/999", headers=admin_headers).status_code == 404


class TestCategories:
    def test_list_sorted_by_name(self, client, make_category):
        make_category("Toys", "toys")
        make_category("Books", "books", "Fiction, non-fiction, and educational")

        data = client.get("/api/categories").json()

        assert [c["name"] for c in data] == ["Books", "Toys"]
        assert data[0]["description"] == "Fiction, non-fiction, and educational"

    def test_create(self, client, admin_headers):
        response = client.post(
            "/api/categories",
            json={"name": "Sports", "slug": "sports", "description": "Sports equipment"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Category created"
        assert isinstance(response.json()["categoryId"], int)

    @pytest.mark.parametrize("payload", [
        {"name": "Sports", "slug": "other"},
        {"name": "Other", "slug": "sports"},
    ])
    def test_duplicate_name_or_slug(self, client, admin_headers, make_category, payload):
        make_category("Sports", "sports")

        response = client.post("/api/categories", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Category name or slug already exists"

    def test_missing_slug(self, client, admin_headers):
        response = client.post("/api/categories", json={"name": "Sports"}, headers=admin_headers)
        assert response.status_code == 400

    def test_requires_admin(self, client, customer_headers):
        response = client.post(
            "/api/categories", json={"name": "Sports", "slug": "sports"}, headers=customer_headers
        )
        assert response.status_code == 403


class TestMergeProductUpdate:
    existing = {
        "name": "Lamp",
        "description": "Desk lamp",
        "price": Decimal("19.99"),
        "stock": 5,
        "category_id": 2,
        "image_url": None,
    }

    def test_unset_fields_keep_value(self):
        merged = merge_product_update(self.existing, ProductUpdate(stock=9))
        assert merged == {**self.existing, "stock": 9}

    def test_explicit_null_keeps_value(self):
        merged = merge_product_update(self.existing, ProductUpdate(description=None, price=Decimal("5")))
        assert merged["description"] == "Desk lamp"
        assert merged["price"] == Decimal("5")

    def test_zero_is_a_real_value(self):
        merged = merge_product_update(self.existing, ProductUpdate(stock=0, price=Decimal("0")))
        assert merged["stock"] == 0
        assert merged["price"] == Decimal("0")

    def test_does_not_mutate_input(self):
        before = dict(self.existing)
        merge_product_update(self.existing, ProductUpdate(name="Other"))
        assert self.existing == before
