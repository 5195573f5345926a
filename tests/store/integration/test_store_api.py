"""Integration tests for the Store FastAPI endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain
from store.api import product_router, purchase_router, register_checkout_error_handlers, shopper_router
from store.cart.cart_line import CartLine
from store.ledger.purchase import Purchase


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(shopper_router)
    app.include_router(product_router)
    app.include_router(purchase_router)
    register_exception_handlers(app)
    register_checkout_error_handlers(app)
    return TestClient(app)


def _register_shopper(client, name="Liliana"):
    response = client.post("/shoppers", json={"name": name, "payment_method": "credit_ending_8987"})
    return response.json()["shopper_id"]


def _register_product(client, name="Silk Shirt", price="799.90"):
    response = client.post("/products", json={"name": name, "price": price})
    return response.json()["product_id"]


def _stocked_cart(client):
    shopper_id = _register_shopper(client)
    silk = _register_product(client)
    jeans = _register_product(client, name="Jeans", price="499.90")
    client.post(f"/shoppers/{shopper_id}/cart/items", json={"product_id": silk, "quantity": 1})
    client.post(f"/shoppers/{shopper_id}/cart/items", json={"product_id": jeans, "quantity": 2})
    return shopper_id, silk, jeans


class TestCatalogueEndpoints:
    def test_register_shopper(self, client):
        response = client.post("/shoppers", json={"name": "Gabrielle"})
        assert response.status_code == 201
        assert "shopper_id" in response.json()

    def test_list_shoppers(self, client):
        _register_shopper(client, name="Pedro")
        _register_shopper(client, name="Luis")
        names = [s["name"] for s in client.get("/shoppers").json()]
        assert names == ["Luis", "Pedro"]

    def test_register_product(self, client):
        response = client.post("/products", json={"name": "Polo Shirt", "price": "299.50"})
        assert response.status_code == 201
        assert "product_id" in response.json()

    def test_list_products_renders_price_as_string(self, client):
        _register_product(client, name="Cargo Shorts", price="350")
        products = client.get("/products").json()
        assert products[0]["name"] == "Cargo Shorts"
        assert products[0]["price"] == "350.00"

    def test_register_product_rejects_negative_price(self, client):
        response = client.post("/products", json={"name": "Voucher", "price": "-1.00"})
        assert response.status_code == 422

    def test_register_product_rejects_extra_precision(self, client):
        response = client.post("/products", json={"name": "Voucher", "price": "1.005"})
        assert response.status_code == 422

    def test_change_price(self, client):
        product_id = _register_product(client)
        response = client.put(f"/products/{product_id}/price", json={"price": "899.90"})
        assert response.status_code == 200
        assert client.get("/products").json()[0]["price"] == "899.90"


class TestCartEndpoints:
    def test_add_and_view_cart(self, client):
        shopper_id, silk, jeans = _stocked_cart(client)
        lines = client.get(f"/shoppers/{shopper_id}/cart").json()
        assert lines == [
            {"product_id": silk, "quantity": 1},
            {"product_id": jeans, "quantity": 2},
        ]

    def test_add_unknown_product(self, client):
        shopper_id = _register_shopper(client)
        response = client.post(f"/shoppers/{shopper_id}/cart/items", json={"product_id": "nope", "quantity": 1})
        assert response.status_code == 400

    def test_cart_of_unknown_shopper(self, client):
        response = client.get("/shoppers/nobody/cart")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NOT_FOUND"


class TestCheckoutEndpoint:
    def test_checkout_creates_purchase(self, client):
        shopper_id, silk, jeans = _stocked_cart(client)
        response = client.post(f"/shoppers/{shopper_id}/checkout")

        assert response.status_code == 201
        data = response.json()
        assert data["shopper_id"] == shopper_id
        assert data["total"] == "1799.70"
        assert data["lines"] == [
            {"product_id": silk, "name": "Silk Shirt", "unit_price": "799.90", "quantity": 1},
            {"product_id": jeans, "name": "Jeans", "unit_price": "499.90", "quantity": 2},
        ]

        current_domain.repository_for(Purchase).get(data["id"])
        assert current_domain.repository_for(CartLine).read_lines(shopper_id) == []

    def test_empty_cart_is_rejected(self, client):
        shopper_id = _register_shopper(client)
        response = client.post(f"/shoppers/{shopper_id}/checkout")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["kind"] == "EMPTY_CART"
        assert error["retryable"] is False
        assert error["message"]

    def test_unknown_shopper(self, client):
        response = client.post("/shoppers/nobody/checkout")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NOT_FOUND"

    def test_second_checkout_is_rejected(self, client):
        shopper_id, _, _ = _stocked_cart(client)
        assert client.post(f"/shoppers/{shopper_id}/checkout").status_code == 201
        assert client.post(f"/shoppers/{shopper_id}/checkout").status_code == 400


class TestPurchaseEndpoints:
    def test_get_purchase(self, client):
        shopper_id, _, _ = _stocked_cart(client)
        purchase_id = client.post(f"/shoppers/{shopper_id}/checkout").json()["id"]

        response = client.get(f"/purchases/{purchase_id}")
        assert response.status_code == 200
        assert response.json()["total"] == "1799.70"

    def test_get_unknown_purchase(self, client):
        response = client.get("/purchases/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NOT_FOUND"

    def test_list_purchases(self, client):
        shopper_id, silk, _ = _stocked_cart(client)
        client.post(f"/shoppers/{shopper_id}/checkout")
        client.post(f"/shoppers/{shopper_id}/cart/items", json={"product_id": silk, "quantity": 1})
        client.post(f"/shoppers/{shopper_id}/checkout")

        totals = [p["total"] for p in client.get(f"/shoppers/{shopper_id}/purchases").json()]
        assert sorted(totals) == ["1799.70", "799.90"]

    def test_purchase_keeps_price_after_catalogue_change(self, client):
        shopper_id, silk, _ = _stocked_cart(client)
        purchase_id = client.post(f"/shoppers/{shopper_id}/checkout").json()["id"]
        client.put(f"/products/{silk}/price", json={"price": "999.90"})

        data = client.get(f"/purchases/{purchase_id}").json()
        assert data["total"] == "1799.70"
        assert data["lines"][0]["unit_price"] == "799.90"
