"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer or guest submitted an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    session_id = String(required=True)
    customer_id = Identifier()
    lines = Text(required=True)  # JSON list of {item_id, display_name, quantity, unit_price}
    item_count = Integer(required=True)
    fulfillment_mode = String(required=True)
    payment_method = String(required=True)
    used_free_drink = Boolean(default=False)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The shop moved an order to its next preparation step."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled before it was handed over."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier()
    reason = String(required=True)
    cancelled_at = DateTime(required=True)
