"""Order placement: checkout converts a session cart into an order.

The handler prices every cart line against the mirrored menu, refuses items
that are unknown or not currently available, and empties the cart once the
order is stored.

A free drink is only marked on the order. Ordering cannot read loyalty cards,
so the caller confirms the balance first and Loyalty debits it on
``OrderPlaced``.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.pricing import current_price_list, unit_price_for
from ordering.domain import ordering
from ordering.order.order import Order, fulfillment_from_payload
from ordering.projections.menu_prices import MenuPrice, display_name, is_orderable

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    session_id = Identifier(required=True)
    customer_id = Identifier()
    fulfillment = Text(required=True)  # JSON delivery descriptor
    payment_method = String(max_length=30)
    free_drink_item_id = Identifier()


def _priced_lines(cart):
    price_list = current_price_list(line.item_id for line in cart.lines)
    menu_repo = current_domain.repository_for(MenuPrice)

    lines_data = []
    for line in cart.lines:
        item_id = str(line.item_id)
        unit_price = unit_price_for(item_id, price_list)
        if unit_price is None:
            raise ValidationError({"item_id": [f"{item_id} is not on the menu"]})

        record = menu_repo.get(item_id)
        if not is_orderable(record):
            raise ValidationError({"item_id": [f"{display_name(record)} is not available right now"]})

        lines_data.append(
            {
                "item_id": item_id,
                "display_name": display_name(record),
                "quantity": line.quantity,
                "unit_price": unit_price,
            }
        )
    return lines_data


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = cart_repo.get(command.session_id)
        except ObjectNotFoundError:
            raise ValidationError({"cart": ["The cart is empty"]}) from None
        if not cart.lines:
            raise ValidationError({"cart": ["The cart is empty"]})

        order = Order.place(
            session_id=str(command.session_id),
            lines_data=_priced_lines(cart),
            fulfillment=fulfillment_from_payload(command.fulfillment),
            payment_method=command.payment_method,
            customer_id=command.customer_id,
            free_drink_item_id=command.free_drink_item_id,
        )
        current_domain.repository_for(Order).add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            session_id=str(command.session_id),
            customer_id=command.customer_id,
        )
        return {"order_id": str(order.id), "order_number": order.order_number}
