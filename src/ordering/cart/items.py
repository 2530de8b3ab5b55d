"""Cart line management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    session_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class SetCartQuantity:
    session_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # Zero or less removes the line


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = Identifier(required=True)
    item_id = Identifier(required=True)


def load_or_start_cart(repo, session_id):
    """Return the session's cart, starting an empty one on first use."""
    try:
        return repo.get(session_id)
    except ObjectNotFoundError:
        return ShoppingCart.create(session_id=session_id)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_start_cart(repo, command.session_id)
        cart.add_item(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = load_or_start_cart(repo, command.session_id)
        cart.set_quantity(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = repo.get(command.session_id)
        except ObjectNotFoundError:
            return
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)
