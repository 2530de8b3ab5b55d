"""Application tests for OrderingLoyaltyEventHandler: Loyalty reacts to placed orders."""

import json
from datetime import UTC, datetime

import pytest
from loyalty.customer.customer import Customer
from loyalty.customer.ordering_events import OrderingLoyaltyEventHandler
from loyalty.customer.registration import RegisterCustomer
from protean import current_domain
from protean.exceptions import InvalidOperationError
from shared.events.ordering import OrderPlaced


def _order_placed(order_id, customer_id=None, used_free_drink=False):
    return OrderPlaced(
        order_id=order_id,
        order_number=f"ORD-1760000000000-{order_id[-4:].upper()}",
        session_id="session-1760000000000-k3j9x2m1q",
        customer_id=customer_id,
        lines=json.dumps([{"item_id": "mocha", "display_name": "موكا", "quantity": 1, "unit_price": "7.00"}]),
        item_count=1,
        fulfillment_mode="pickup",
        payment_method="cash",
        used_free_drink=used_free_drink,
        total_amount=0.0 if used_free_drink else 7.0,
        placed_at=datetime.now(UTC),
    )


@pytest.fixture()
def customer_id():
    return current_domain.process(RegisterCustomer(name="Sara", phone="0501234567"), asynchronous=False)[
        "customer_id"
    ]


class TestOrderPlacedHandler:
    def test_registered_customer_earns_a_stamp(self, customer_id):
        OrderingLoyaltyEventHandler().on_order_placed(_order_placed("ord-0001", customer_id))
        assert current_domain.repository_for(Customer).get(customer_id).stamps == 1

    def test_redelivered_event_is_stamped_once(self, customer_id):
        handler = OrderingLoyaltyEventHandler()
        handler.on_order_placed(_order_placed("ord-0001", customer_id))
        handler.on_order_placed(_order_placed("ord-0001", customer_id))
        assert current_domain.repository_for(Customer).get(customer_id).stamps == 1

    def test_five_orders_then_a_free_one(self, customer_id):
        handler = OrderingLoyaltyEventHandler()
        for number in range(5):
            handler.on_order_placed(_order_placed(f"ord-000{number}", customer_id))
        handler.on_order_placed(_order_placed("ord-free", customer_id, used_free_drink=True))

        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.stamps == 0
        assert customer.free_drinks == 0

    def test_free_drink_without_balance_is_refused(self, customer_id):
        with pytest.raises(InvalidOperationError):
            OrderingLoyaltyEventHandler().on_order_placed(_order_placed("ord-free", customer_id, used_free_drink=True))

    def test_guest_order_is_ignored(self, customer_id):
        OrderingLoyaltyEventHandler().on_order_placed(_order_placed("ord-0001"))
        assert current_domain.repository_for(Customer).get(customer_id).stamps == 0

    def test_unknown_customer_is_ignored(self):
        OrderingLoyaltyEventHandler().on_order_placed(_order_placed("ord-0001", "cust-unknown"))
