"""Domain events for the loyalty Customer aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from loyalty.domain import loyalty


@loyalty.event(part_of="Customer")
class CustomerRegistered:
    """A customer signed up and received a loyalty card."""

    __version__ = 1

    customer_id: Identifier(required=True)
    name: String(required=True)
    phone: String(required=True)
    card_number: String(required=True)
    registered_at: DateTime(required=True)


@loyalty.event(part_of="Customer")
class StampEarned:
    """A paid order added a stamp to the customer's card."""

    __version__ = 1

    customer_id: Identifier(required=True)
    card_number: String(required=True)
    order_id: Identifier(required=True)
    stamps: Integer(required=True)
    free_drinks: Integer(required=True)


@loyalty.event(part_of="Customer")
class FreeDrinkEarned:
    """The fifth stamp converted into a free drink."""

    __version__ = 1

    customer_id: Identifier(required=True)
    card_number: String(required=True)
    order_id: Identifier(required=True)
    free_drinks: Integer(required=True)


@loyalty.event(part_of="Customer")
class FreeDrinkRedeemed:
    """A free drink was spent."""

    __version__ = 1

    customer_id: Identifier(required=True)
    card_number: String(required=True)
    order_id: Identifier()  # Absent for redemptions made at the counter
    stamps: Integer(required=True)
    free_drinks: Integer(required=True)
