"""Domain events for the MenuItem aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="MenuItem")
class MenuItemAdded:
    """A drink or pastry was added to the menu."""

    __version__ = 1

    item_id: Identifier(required=True)
    name_ar: String(required=True)
    name_en: String()
    category: String()
    price: Float(required=True)
    previous_price: Float()
    availability: String(required=True)
    added_at: DateTime(required=True)


@catalogue.event(part_of="MenuItem")
class MenuItemPriceChanged:
    """A menu item's price was changed."""

    __version__ = 1

    item_id: Identifier(required=True)
    previous_price: Float()
    new_price: Float(required=True)
    changed_at: DateTime(required=True)


@catalogue.event(part_of="MenuItem")
class MenuItemAvailabilityChanged:
    """A menu item went in or out of stock."""

    __version__ = 1

    item_id: Identifier(required=True)
    previous_availability: String(required=True)
    new_availability: String(required=True)
    changed_at: DateTime(required=True)
