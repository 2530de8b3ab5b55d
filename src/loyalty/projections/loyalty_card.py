"""Loyalty card: employee lookup of a card by its printed number."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from loyalty.customer.customer import Customer
from loyalty.customer.events import CustomerRegistered, FreeDrinkRedeemed, StampEarned
from loyalty.domain import loyalty


@loyalty.projection
class LoyaltyCard:
    card_number: Identifier(identifier=True, required=True)
    customer_id: String(required=True)
    name: String(required=True)
    phone: String(required=True)
    stamps: Integer(default=0)
    free_drinks: Integer(default=0)
    registered_at: DateTime()


@loyalty.projector(projector_for=LoyaltyCard, aggregates=[Customer])
class LoyaltyCardProjector:
    @on(CustomerRegistered)
    def on_customer_registered(self, event):
        current_domain.repository_for(LoyaltyCard).add(
            LoyaltyCard(
                card_number=event.card_number,
                customer_id=str(event.customer_id),
                name=event.name,
                phone=event.phone,
                stamps=0,
                free_drinks=0,
                registered_at=event.registered_at,
            )
        )

    @on(StampEarned)
    def on_stamp_earned(self, event):
        self._update_balance(event)

    @on(FreeDrinkRedeemed)
    def on_free_drink_redeemed(self, event):
        self._update_balance(event)

    @staticmethod
    def _update_balance(event):
        repo = current_domain.repository_for(LoyaltyCard)
        try:
            card = repo.get(event.card_number)
        except ObjectNotFoundError:
            return
        card.stamps = event.stamps
        card.free_drinks = event.free_drinks
        repo.add(card)
