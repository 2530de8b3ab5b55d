"""Application tests for cart commands."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, RemoveFromCart, SetCartQuantity
from ordering.cart.management import ClearCart
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

SESSION = "session-1760000000000-k3j9x2m1q"


def _cart():
    return current_domain.repository_for(ShoppingCart).get(SESSION)


def _add(item_id, quantity=1):
    current_domain.process(AddToCart(session_id=SESSION, item_id=item_id, quantity=quantity), asynchronous=False)


class TestAddToCart:
    def test_first_add_starts_the_cart(self):
        _add("espresso-single", 2)
        assert _cart().line_for("espresso-single").quantity == 2

    def test_adds_merge(self):
        _add("espresso-single", 2)
        _add("espresso-single", 1)
        cart = _cart()
        assert len(cart.lines) == 1
        assert cart.total_item_count() == 3

    def test_zero_quantity_is_rejected(self):
        with pytest.raises(ValidationError):
            _add("mocha", 0)


class TestSetCartQuantity:
    def test_set_quantity(self):
        _add("mocha", 1)
        current_domain.process(SetCartQuantity(session_id=SESSION, item_id="mocha", quantity=4), asynchronous=False)
        assert _cart().line_for("mocha").quantity == 4

    def test_zero_removes_the_line(self):
        _add("mocha", 1)
        _add("latte", 1)
        current_domain.process(SetCartQuantity(session_id=SESSION, item_id="mocha", quantity=0), asynchronous=False)

        cart = _cart()
        assert cart.line_for("mocha") is None
        assert cart.line_for("latte") is not None


    def test_interleaved_writes_from_two_tabs(self):
        _add("mocha", 1)
        current_domain.process(SetCartQuantity(session_id=SESSION, item_id="mocha", quantity=3), asynchronous=False)
        _add("mocha", 2)
        current_domain.process(SetCartQuantity(session_id=SESSION, item_id="mocha", quantity=4), asynchronous=False)

        cart = _cart()
        assert len(cart.lines) == 1
        assert cart.line_for("mocha").quantity == 4


class TestRemoveAndClear:
    def test_remove_from_cart(self):
        _add("mocha", 1)
        current_domain.process(RemoveFromCart(session_id=SESSION, item_id="mocha"), asynchronous=False)
        assert len(_cart().lines) == 0

    def test_remove_without_a_cart_is_a_no_op(self):
        current_domain.process(RemoveFromCart(session_id=SESSION, item_id="mocha"), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _cart()

    def test_clear_cart(self):
        _add("mocha", 1)
        _add("latte", 2)
        current_domain.process(ClearCart(session_id=SESSION), asynchronous=False)
        assert _cart().total_item_count() == 0

    def test_clear_without_a_cart_is_a_no_op(self):
        current_domain.process(ClearCart(session_id=SESSION), asynchronous=False)
