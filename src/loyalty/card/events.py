"""Domain events for the CardNumberPool aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from loyalty.domain import loyalty


@loyalty.event(part_of="CardNumberPool")
class CardNumberAssigned:
    """A card number left the pool for a newly registered customer."""

    __version__ = 1

    pool_id: Identifier(required=True)
    card_number: String(required=True)
    synthesized: Boolean(default=False)
    remaining: Integer(required=True)
