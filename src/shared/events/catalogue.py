"""Cross-domain event contracts for Catalogue domain events.

These classes define the event shape for consumption by other domains
(the Ordering domain mirrors menu prices and availability from them).
They are registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization works
correctly.

The source-of-truth events are in src/catalogue/menu/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, String


class MenuItemAdded(BaseEvent):
    """A drink or pastry was added to the menu."""

    __version__ = 1

    item_id = Identifier(required=True)
    name_ar = String(required=True)
    name_en = String()
    category = String()
    price = Float(required=True)
    previous_price = Float()
    availability = String(required=True)
    added_at = DateTime(required=True)


class MenuItemPriceChanged(BaseEvent):
    """A menu item's price was changed."""

    __version__ = 1

    item_id = Identifier(required=True)
    previous_price = Float()
    new_price = Float(required=True)
    changed_at = DateTime(required=True)


class MenuItemAvailabilityChanged(BaseEvent):
    """A menu item went in or out of stock."""

    __version__ = 1

    item_id = Identifier(required=True)
    previous_availability = String(required=True)
    new_availability = String(required=True)
    changed_at = DateTime(required=True)
