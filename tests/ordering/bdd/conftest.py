"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartCleared, CartLineAdded, CartLineQuantitySet, CartLineRemoved
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_CART_EVENT_CLASSES = {
    "CartLineAdded": CartLineAdded,
    "CartLineQuantitySet": CartLineQuantitySet,
    "CartLineRemoved": CartLineRemoved,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps: Shopping Cart
# ---------------------------------------------------------------------------
@given("an empty session cart", target_fixture="cart")
def empty_cart():
    cart = ShoppingCart.create(session_id="session-1760000000000-bddsessn1")
    cart._events.clear()
    return cart


@given(parsers.cfparse('the cart holds "{item_id}" with quantity {qty:d}'), target_fixture="cart")
def cart_holding(cart, item_id, qty):
    cart.add_item(item_id, qty)
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps: shared
# ---------------------------------------------------------------------------
@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
