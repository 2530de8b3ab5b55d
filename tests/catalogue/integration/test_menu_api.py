"""Integration tests for the menu endpoints."""

import pytest
from catalogue.api import menu_router
from catalogue.menu.menu_item import MenuItem
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from protean.utils.globals import current_domain


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(menu_router)
    return TestClient(app)


def _add(client, item_id, price, **extra):
    response = client.post("/menu-items", json={"item_id": item_id, "name_ar": item_id, "price": price, **extra})
    assert response.status_code == 201
    return response.json()["item_id"]


class TestAddMenuItemEndpoint:
    def test_add_menu_item(self, client):
        item_id = _add(client, "espresso-single", "4.00", name_en="Espresso")
        assert item_id == "espresso-single"

        item = current_domain.repository_for(MenuItem).get("espresso-single")
        assert item.price == 4.0

    def test_price_as_decimal_wrapper(self, client):
        _add(client, "mocha", {"$numberDecimal": "7.00"})
        assert current_domain.repository_for(MenuItem).get("mocha").price == 7.0

    def test_malformed_price_is_unprocessable(self, client):
        response = client.post("/menu-items", json={"item_id": "latte", "name_ar": "لاتيه", "price": "cheap"})
        assert response.status_code == 422

    def test_duplicate_item_is_rejected(self, client):
        _add(client, "latte", 12)
        response = client.post("/menu-items", json={"item_id": "latte", "name_ar": "لاتيه", "price": 12})
        assert response.status_code == 400


class TestReadMenuEndpoints:
    def test_get_menu_item(self, client):
        _add(client, "cortado", "9.00", previous_price="12.00")

        response = client.get("/menu-items/cortado")
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "9.00"
        assert data["previous_price"] == "12.00"
        assert data["discount_percentage"] == 25
        assert data["availability"] == "available"

    def test_get_unknown_item_is_not_found(self, client):
        response = client.get("/menu-items/nothing-here")
        assert response.status_code == 404

    def test_list_filters_by_ids(self, client):
        _add(client, "mocha", 7)
        _add(client, "espresso-single", 4)
        _add(client, "latte", 12)

        response = client.get("/menu-items", params={"ids": "mocha,espresso-single"})
        assert response.status_code == 200
        assert [item["item_id"] for item in response.json()["items"]] == ["espresso-single", "mocha"]

    def test_list_filters_by_category(self, client):
        _add(client, "iced-latte", 14, category="cold")
        _add(client, "latte", 12, category="hot")

        response = client.get("/menu-items", params={"category": "cold"})
        assert [item["item_id"] for item in response.json()["items"]] == ["iced-latte"]

    def test_list_returns_the_whole_menu(self, client):
        repo = current_domain.repository_for(MenuItem)
        for number in range(120):
            repo.add(MenuItem(item_id=f"drink-{number:03d}", name_ar=f"مشروب {number}", price=5.0))

        items = client.get("/menu-items").json()["items"]
        assert len(items) == 120
        assert items[-1]["item_id"] == "drink-119"

        wanted = ",".join(f"drink-{number:03d}" for number in range(5, 115))
        assert len(client.get("/menu-items", params={"ids": wanted}).json()["items"]) == 110


class TestChangeMenuItemEndpoints:
    def test_change_price(self, client):
        _add(client, "mocha", "7.00")

        response = client.put("/menu-items/mocha/price", json={"price": "6.00"})
        assert response.status_code == 200

        data = client.get("/menu-items/mocha").json()
        assert data["price"] == "6.00"
        assert data["previous_price"] == "7.00"

    def test_change_availability(self, client):
        _add(client, "mocha", "7.00")

        response = client.put("/menu-items/mocha/availability", json={"availability": "out_of_stock"})
        assert response.status_code == 200
        assert client.get("/menu-items/mocha").json()["availability"] == "out_of_stock"

    def test_unknown_availability_is_rejected(self, client):
        _add(client, "mocha", "7.00")

        response = client.put("/menu-items/mocha/availability", json={"availability": "gone"})
        assert response.status_code == 400
