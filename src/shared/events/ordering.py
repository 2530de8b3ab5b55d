"""Cross-domain event contracts for Ordering domain events.

These classes define the event shape for consumption by other domains
(the Loyalty domain stamps cards and redeems free drinks when an order is
placed). They are registered as external events via
domain.register_external_event() with matching __type__ strings so
Protean's stream deserialization works correctly.

The source-of-truth events are in src/ordering/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text


class OrderPlaced(BaseEvent):
    """A customer or guest submitted an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    session_id = String(required=True)
    customer_id = Identifier()  # Absent for guest orders
    lines = Text(required=True)  # JSON list of {item_id, display_name, quantity, unit_price}
    item_count = Integer(required=True)
    fulfillment_mode = String(required=True)
    payment_method = String(required=True)
    used_free_drink = Boolean(default=False)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


class OrderCancelled(BaseEvent):
    """An order was cancelled before it was handed over."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier()
    reason = String(required=True)
    cancelled_at = DateTime(required=True)
