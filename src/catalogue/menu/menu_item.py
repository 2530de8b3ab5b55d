"""MenuItem aggregate: a drink or pastry offered by the shop."""

import re
from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue
from shared.money import PriceFormatError, discount_percentage, to_decimal


class Availability(Enum):
    AVAILABLE = "available"
    OUT_OF_STOCK = "out_of_stock"
    COMING_SOON = "coming_soon"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"


class MenuCategory(Enum):
    HOT = "hot"
    COLD = "cold"
    SPECIALTY = "specialty"
    DESSERT = "dessert"
    BAKERY = "bakery"


_SLUG = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def _amount(value, field):
    try:
        return float(to_decimal(value))
    except PriceFormatError as exc:
        raise ValidationError({field: [str(exc)]}) from None


@catalogue.aggregate
class MenuItem:
    """Menu item aggregate root, identified by a human-readable slug."""

    item_id: Identifier(identifier=True, required=True)
    name_ar: String(required=True, max_length=200)
    name_en: String(max_length=200)
    description_ar: String(max_length=1000)
    category: String(choices=MenuCategory, default=MenuCategory.HOT.value)
    price: Float(required=True, min_value=0.0)
    previous_price: Float(min_value=0.0)
    availability: String(choices=Availability, default=Availability.AVAILABLE.value)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def item_id_must_be_a_slug(self):
        if not _SLUG.match(str(self.item_id)):
            raise ValidationError({"item_id": ["Item id must be lowercase letters, digits and single hyphens"]})

    def discount_percentage(self) -> int:
        return discount_percentage(self.price, self.previous_price)

    def is_available(self) -> bool:
        return self.availability == Availability.AVAILABLE.value

    @classmethod
    def create(
        cls,
        item_id,
        name_ar,
        price,
        name_en=None,
        description_ar=None,
        category=None,
        previous_price=None,
        availability=None,
    ):
        from catalogue.menu.events import MenuItemAdded

        amount = _amount(price, "price")
        previous = _amount(previous_price, "previous_price") if previous_price is not None else None
        now = datetime.now()

        item = cls(
            item_id=item_id,
            name_ar=name_ar,
            name_en=name_en,
            description_ar=description_ar,
            category=category or MenuCategory.HOT.value,
            price=amount,
            previous_price=previous,
            availability=availability or Availability.AVAILABLE.value,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            MenuItemAdded(
                item_id=item.item_id,
                name_ar=name_ar,
                name_en=name_en,
                category=item.category,
                price=amount,
                previous_price=previous,
                availability=item.availability,
                added_at=now,
            )
        )
        return item

    def change_price(self, new_price):
        """Reprice the item; the old price is kept for the struck-through display."""
        from catalogue.menu.events import MenuItemPriceChanged

        amount = _amount(new_price, "price")
        if amount == self.price:
            return

        old_price = self.price
        self.previous_price = old_price
        self.price = amount
        self.updated_at = datetime.now()

        self.raise_(
            MenuItemPriceChanged(
                item_id=self.item_id,
                previous_price=old_price,
                new_price=amount,
                changed_at=self.updated_at,
            )
        )

    def change_availability(self, availability):
        from catalogue.menu.events import MenuItemAvailabilityChanged

        try:
            new_availability = Availability(availability).value
        except ValueError:
            raise ValidationError({"availability": [f"Unknown availability: {availability}"]}) from None
        if new_availability == self.availability:
            return

        old_availability = self.availability
        self.availability = new_availability
        self.updated_at = datetime.now()

        self.raise_(
            MenuItemAvailabilityChanged(
                item_id=self.item_id,
                previous_availability=old_availability,
                new_availability=new_availability,
                changed_at=self.updated_at,
            )
        )
