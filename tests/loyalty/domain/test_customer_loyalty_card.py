"""Tests for stamping and free drinks on the Customer aggregate."""

import pytest
from loyalty.customer.customer import STAMPS_PER_FREE_DRINK, Customer
from loyalty.customer.events import CustomerRegistered, FreeDrinkEarned, FreeDrinkRedeemed, StampEarned
from protean.exceptions import InvalidOperationError, ValidationError


def _customer():
    customer = Customer.register(name="نورة", phone="+966 50 123 4567", card_number="CUP-1050")
    customer._events.clear()
    return customer


def _stamp(customer, count, start=1):
    for number in range(start, start + count):
        customer.record_completed_order(f"order-{number}")


class TestRegistration:
    def test_register_starts_an_empty_card(self):
        customer = Customer.register(name=" نورة ", phone="+966 50 123 4567", card_number="CUP-1050")
        assert customer.name == "نورة"
        assert customer.phone == "+966501234567"
        assert customer.card_number == "CUP-1050"
        assert customer.stamps == 0
        assert customer.free_drinks == 0

    def test_register_raises_event(self):
        customer = Customer.register(name="Sara", phone="0501234567", card_number="CUP-1049")
        event = customer._events[0]
        assert isinstance(event, CustomerRegistered)
        assert event.card_number == "CUP-1049"

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            Customer.register(name="  ", phone="0501234567", card_number="CUP-1049")

    def test_invalid_phone_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Customer.register(name="Sara", phone="call me", card_number="CUP-1049")
        assert "phone" in exc.value.messages


class TestStamps:
    def test_each_order_adds_a_stamp(self):
        customer = _customer()
        _stamp(customer, 3)
        assert customer.stamps == 3
        assert customer.free_drinks == 0

    def test_fifth_stamp_becomes_a_free_drink(self):
        customer = _customer()
        _stamp(customer, STAMPS_PER_FREE_DRINK)

        assert customer.stamps == 0
        assert customer.free_drinks == 1
        assert any(isinstance(e, FreeDrinkEarned) for e in customer._events)

    def test_stamps_reset_exactly(self):
        customer = _customer()
        _stamp(customer, 7)
        assert customer.stamps == 2
        assert customer.free_drinks == 1

    def test_ten_orders_earn_two_free_drinks(self):
        customer = _customer()
        _stamp(customer, 10)
        assert customer.stamps == 0
        assert customer.free_drinks == 2

    def test_stamp_raises_event(self):
        customer = _customer()
        customer.record_completed_order("order-1")

        event = customer._events[0]
        assert isinstance(event, StampEarned)
        assert event.stamps == 1
        assert event.order_id == "order-1"

    def test_an_order_is_recorded_once(self):
        customer = _customer()
        assert customer.record_completed_order("order-1") is True
        assert customer.record_completed_order("order-1") is False
        assert customer.stamps == 1
        assert len(customer.ledger) == 1

    def test_ledger_tracks_the_balance(self):
        customer = _customer()
        _stamp(customer, 5)
        last = customer.ledger[-1]
        assert last.kind == "stamp"
        assert last.stamps_after == 0
        assert last.free_drinks_after == 1

    def test_stamps_cannot_reach_a_full_card(self):
        customer = _customer()
        with pytest.raises(ValidationError):
            customer.stamps = STAMPS_PER_FREE_DRINK


class TestFreeDrinks:
    def test_order_paid_with_a_free_drink_spends_one(self):
        customer = _customer()
        _stamp(customer, 6)
        customer._events.clear()

        customer.record_completed_order("order-free", used_free_drink=True)

        assert customer.free_drinks == 0
        assert customer.stamps == 1
        assert isinstance(customer._events[0], FreeDrinkRedeemed)
        assert customer.ledger[-1].kind == "redeem"

    def test_free_drink_order_without_balance_is_refused(self):
        customer = _customer()
        with pytest.raises(InvalidOperationError):
            customer.record_completed_order("order-free", used_free_drink=True)

    def test_use_free_drink_at_the_counter(self):
        customer = _customer()
        _stamp(customer, 5)
        assert customer.use_free_drink() == 0

    def test_use_free_drink_without_balance(self):
        with pytest.raises(ValidationError) as exc:
            _customer().use_free_drink()
        assert "free_drinks" in exc.value.messages
