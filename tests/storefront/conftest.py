"""Fixtures for storefront tests.

FakeApi stands in for the HTTP API: it keeps one server-side cart per
session and answers with the same document shapes as the real endpoints.
"""

import uuid
from datetime import UTC, datetime

import pytest
from storefront.errors import ApiError
from storefront.storage.memory_adapter import MemoryStore

MENU = [
    {"item_id": "espresso-single", "name_ar": "إسبريسو", "name_en": "Espresso", "price": "4.00"},
    {"item_id": "mocha", "name_ar": "موكا", "name_en": "Mocha", "price": {"$numberDecimal": "7.00"}},
    {"item_id": "broken-price", "name_ar": "خطأ", "price": "n/a"},
]


class FakeApi:
    def __init__(self, menu=MENU):
        self.menu = {document["item_id"]: document for document in menu}
        self.carts = {}
        self.orders = {}
        self.customers = {}
        self.placed = []
        self.calls = []

    def _cart(self, session_id):
        lines = self.carts.get(session_id, {})
        return {
            "session_id": session_id,
            "lines": [{"item_id": item_id, "quantity": quantity} for item_id, quantity in lines.items()],
        }

    def menu_items(self, item_ids=None):
        self.calls.append(("menu_items", list(item_ids or [])))
        return [document for item_id, document in self.menu.items() if not item_ids or item_id in item_ids]

    def get_cart(self, session_id):
        self.calls.append(("get_cart", session_id))
        return self._cart(session_id)

    def add_to_cart(self, session_id, item_id, quantity):
        self.calls.append(("add_to_cart", session_id, item_id, quantity))
        lines = self.carts.setdefault(session_id, {})
        lines[item_id] = lines.get(item_id, 0) + quantity
        return self._cart(session_id)

    def set_cart_quantity(self, session_id, item_id, quantity):
        self.calls.append(("set_cart_quantity", session_id, item_id, quantity))
        self.carts.setdefault(session_id, {})[item_id] = quantity
        return self._cart(session_id)

    def remove_from_cart(self, session_id, item_id):
        self.calls.append(("remove_from_cart", session_id, item_id))
        self.carts.get(session_id, {}).pop(item_id, None)
        return self._cart(session_id)

    def clear_cart(self, session_id):
        self.calls.append(("clear_cart", session_id))
        self.carts.pop(session_id, None)
        return self._cart(session_id)

    def place_order(self, payload):
        self.placed.append(payload)
        lines = self.carts.pop(payload["session_id"], {})
        order_id = str(uuid.uuid4())
        order_lines = [
            {
                "item_id": item_id,
                "display_name": self.menu[item_id]["name_ar"],
                "quantity": quantity,
                "unit_price": "4.00" if item_id == "espresso-single" else "7.00",
            }
            for item_id, quantity in lines.items()
        ]
        total = sum(float(line["unit_price"]) * line["quantity"] for line in order_lines)
        total += float(payload["fulfillment"].get("fee") or 0)
        self.orders[order_id] = {
            "order_id": order_id,
            "order_number": f"ORD-1760000000000-{len(self.orders):04X}",
            "status": "pending",
            "lines": order_lines,
            "total_amount": f"{total:.2f}",
            "payment_method": payload["payment_method"],
            "used_free_drink": bool(payload.get("free_drink_item_id")),
            "created_at": datetime.now(UTC).isoformat(),
            "customer_id": payload.get("customer_id"),
            "session_id": payload["session_id"],
        }
        return {"order_id": order_id, "order_number": self.orders[order_id]["order_number"]}

    def get_order(self, order_id):
        return self.orders[order_id]

    def customer_orders(self, customer_id):
        return [order for order in self.orders.values() if order["customer_id"] == customer_id]

    def session_orders(self, session_id):
        return [order for order in self.orders.values() if order["session_id"] == session_id]

    def register_customer(self, name, phone):
        if any(customer["phone"] == phone for customer in self.customers.values()):
            raise ApiError(400, "phone: This phone number is already registered")
        customer_id = str(uuid.uuid4())
        self.customers[customer_id] = {
            "customer_id": customer_id,
            "name": name,
            "phone": phone,
            "card_number": f"CUP-{1050 - len(self.customers)}",
            "stamps": 0,
            "free_drinks": 0,
        }
        return {"customer_id": customer_id, "card_number": self.customers[customer_id]["card_number"]}

    def get_customer(self, customer_id):
        return self.customers[customer_id]

    def find_customer(self, phone):
        for customer in self.customers.values():
            if customer["phone"] == phone:
                return customer
        raise ApiError(404, "No customer with this phone number")

    def redeem_free_drink(self, customer_id):
        customer = self.customers[customer_id]
        if customer["free_drinks"] <= 0:
            raise ApiError(400, "free_drinks: No free drinks available")
        customer["free_drinks"] -= 1
        return {"free_drinks": customer["free_drinks"]}


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def api():
    return FakeApi()
