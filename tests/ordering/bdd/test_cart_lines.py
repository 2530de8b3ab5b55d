"""BDD tests for session cart lines."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart_lines.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{item_id}" is added to the cart with quantity {qty:d}'))
def add_item_to_cart(cart, item_id, qty, error):
    try:
        cart.add_item(item_id, qty)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the quantity of "{item_id}" is set to {qty:d}'))
def set_item_quantity(cart, item_id, qty):
    cart.set_quantity(item_id, qty)


@when("the cart is cleared")
def clear_cart(cart):
    cart.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse('the line for "{item_id}" has quantity {qty:d}'))
def line_has_quantity(cart, item_id, qty):
    assert cart.line_for(item_id).quantity == qty


@then(parsers.cfparse('the cart has no line for "{item_id}"'))
def cart_has_no_line(cart, item_id):
    assert cart.line_for(item_id) is None
