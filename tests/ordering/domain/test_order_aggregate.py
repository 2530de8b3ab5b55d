"""Tests for Order placement, pricing and fulfillment."""

import json
import re
from decimal import Decimal

import pytest
from ordering.order.events import OrderPlaced
from ordering.order.order import Fulfillment, Order, OrderStatus, fulfillment_from_payload, generate_order_number
from protean.exceptions import ValidationError

LINES = [
    {"item_id": "espresso-single", "display_name": "إسبريسو", "quantity": 2, "unit_price": Decimal("4.00")},
    {"item_id": "mocha", "display_name": "موكا", "quantity": 1, "unit_price": Decimal("7.00")},
]


def _pickup():
    return Fulfillment(mode="pickup", branch_id="olaya", branch_name="العليا")


def _delivery(fee=10.0):
    return Fulfillment(
        mode="delivery",
        fee=fee,
        address="King Fahd Rd, Riyadh",
        latitude=24.7136,
        longitude=46.6753,
        zone="north",
    )


class TestOrderNumber:
    def test_order_number_format(self):
        assert re.match(r"^ORD-\d{13}-[0-9A-F]{4}$", generate_order_number())


class TestFulfillment:
    def test_pickup(self):
        fulfillment = _pickup()
        assert fulfillment.mode == "pickup"
        assert fulfillment.fee == 0.0

    def test_pickup_rejects_a_fee(self):
        with pytest.raises(ValidationError):
            Fulfillment(mode="pickup", fee=5.0)

    def test_delivery_needs_coordinates(self):
        with pytest.raises(ValidationError):
            Fulfillment(mode="delivery", fee=10.0, address="King Fahd Rd")

    def test_dine_in_needs_a_table(self):
        with pytest.raises(ValidationError):
            Fulfillment(mode="dine_in")

    def test_dine_in_with_table(self):
        assert Fulfillment(mode="dine_in", table_number="12").table_number == "12"

    def test_unknown_mode_is_rejected(self):
        with pytest.raises(ValidationError):
            Fulfillment(mode="drone")

    def test_from_payload_reads_destination(self):
        fulfillment = fulfillment_from_payload(
            json.dumps(
                {
                    "mode": "delivery",
                    "fee": "10",
                    "destination": {"address": "Olaya St", "latitude": 24.69, "longitude": 46.68},
                }
            )
        )
        assert fulfillment.address == "Olaya St"
        assert fulfillment.fee == 10.0

    def test_from_empty_payload_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            fulfillment_from_payload(None)
        assert "fulfillment" in exc.value.messages


class TestOrderPlacement:
    def test_place_prices_the_lines(self):
        order = Order.place(session_id="session-1", lines_data=LINES, fulfillment=_pickup())

        assert order.pricing.subtotal == 15.0
        assert order.pricing.delivery_fee == 0.0
        assert order.total_amount() == Decimal("15.00")
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_method == "cash"
        assert order.used_free_drink is False

    def test_delivery_fee_is_added(self):
        order = Order.place(session_id="session-1", lines_data=LINES, fulfillment=_delivery(fee=10.0))
        assert order.total_amount() == Decimal("25.00")

    def test_free_drink_discounts_one_unit(self):
        order = Order.place(
            session_id="session-1",
            lines_data=LINES,
            fulfillment=_pickup(),
            customer_id="cust-1",
            free_drink_item_id="mocha",
        )
        assert order.used_free_drink is True
        assert order.pricing.free_drink_discount == 7.0
        assert order.total_amount() == Decimal("8.00")

    def test_guest_cannot_use_a_free_drink(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(session_id="session-1", lines_data=LINES, fulfillment=_pickup(), free_drink_item_id="mocha")
        assert "free_drink_item_id" in exc.value.messages

    def test_free_drink_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Order.place(
                session_id="session-1",
                lines_data=LINES,
                fulfillment=_pickup(),
                customer_id="cust-1",
                free_drink_item_id="latte",
            )

    def test_empty_lines_are_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(session_id="session-1", lines_data=[], fulfillment=_pickup())
        assert "lines" in exc.value.messages

    def test_unknown_payment_method_is_rejected(self):
        with pytest.raises(ValidationError):
            Order.place(session_id="session-1", lines_data=LINES, fulfillment=_pickup(), payment_method="bitcoin")

    def test_place_raises_order_placed(self):
        order = Order.place(session_id="session-1", lines_data=LINES, fulfillment=_pickup(), customer_id="cust-1")

        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.order_number == order.order_number
        assert event.customer_id == "cust-1"
        assert event.item_count == 3
        assert event.total_amount == 15.0
        assert json.loads(event.lines)[0]["unit_price"] == "4.00"

    def test_lines_snapshot(self):
        order = Order.place(session_id="session-1", lines_data=LINES, fulfillment=_pickup())
        snapshot = order.lines_snapshot()
        assert {line["item_id"] for line in snapshot} == {"espresso-single", "mocha"}
