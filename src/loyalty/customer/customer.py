"""Loyalty Customer aggregate with its LedgerEntry history.

The card holds between zero and four stamps. A fifth stamp is never stored:
it becomes one free drink and the card resets to exactly zero stamps. Every
order is recorded in the ledger at most once.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from loyalty.domain import loyalty
from loyalty.shared.phone import normalize_phone

STAMPS_PER_FREE_DRINK = 5


class LedgerEntryKind(Enum):
    STAMP = "stamp"
    REDEEM = "redeem"


@loyalty.entity(part_of="Customer")
class LedgerEntry:
    """One order's effect on the card."""

    order_id: Identifier(required=True)
    kind: String(choices=LedgerEntryKind, required=True)
    stamps_after: Integer(min_value=0)
    free_drinks_after: Integer(min_value=0)
    recorded_at: DateTime(default=datetime.now)


@loyalty.aggregate
class Customer:
    """A registered coffee-shop customer and their loyalty card."""

    name: String(required=True, max_length=100)
    phone: String(required=True, max_length=20, unique=True)
    card_number: String(required=True, max_length=20, unique=True)
    stamps: Integer(default=0, min_value=0)
    free_drinks: Integer(default=0, min_value=0)
    ledger: HasMany(LedgerEntry)
    registered_at: DateTime(default=datetime.now)
    last_order_at: DateTime()

    @invariant.post
    def stamps_stay_below_a_full_card(self):
        if not 0 <= self.stamps < STAMPS_PER_FREE_DRINK:
            raise ValidationError({"stamps": [f"Stamps must be between 0 and {STAMPS_PER_FREE_DRINK - 1}"]})

    @classmethod
    def register(cls, name, phone, card_number):
        from loyalty.customer.events import CustomerRegistered

        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required"]})

        now = datetime.now()
        customer = cls(
            name=name.strip(),
            phone=normalize_phone(phone),
            card_number=card_number,
            stamps=0,
            free_drinks=0,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=customer.id,
                name=customer.name,
                phone=customer.phone,
                card_number=card_number,
                registered_at=now,
            )
        )
        return customer

    def has_recorded(self, order_id) -> bool:
        return any(str(entry.order_id) == str(order_id) for entry in self.ledger)

    def record_completed_order(self, order_id, used_free_drink=False) -> bool:
        """Apply an order to the card.

        An order paid with a free drink spends one; any other order earns a
        stamp. Returns False when the order was already recorded.
        """
        from loyalty.customer.events import FreeDrinkEarned, FreeDrinkRedeemed, StampEarned

        if self.has_recorded(order_id):
            return False

        now = datetime.now()
        if used_free_drink:
            if self.free_drinks <= 0:
                raise InvalidOperationError(
                    f"Order {order_id} redeemed a free drink but card {self.card_number} has none"
                )
            with atomic_change(self):
                self.free_drinks -= 1
                self.last_order_at = now
            kind = LedgerEntryKind.REDEEM
            self.raise_(
                FreeDrinkRedeemed(
                    customer_id=self.id,
                    card_number=self.card_number,
                    order_id=order_id,
                    stamps=self.stamps,
                    free_drinks=self.free_drinks,
                )
            )
        else:
            stamps = self.stamps + 1
            earned_free_drink = stamps >= STAMPS_PER_FREE_DRINK
            with atomic_change(self):
                if earned_free_drink:
                    self.free_drinks += 1
                    self.stamps = 0
                else:
                    self.stamps = stamps
                self.last_order_at = now
            kind = LedgerEntryKind.STAMP
            self.raise_(
                StampEarned(
                    customer_id=self.id,
                    card_number=self.card_number,
                    order_id=order_id,
                    stamps=self.stamps,
                    free_drinks=self.free_drinks,
                )
            )
            if earned_free_drink:
                self.raise_(
                    FreeDrinkEarned(
                        customer_id=self.id,
                        card_number=self.card_number,
                        order_id=order_id,
                        free_drinks=self.free_drinks,
                    )
                )

        self.add_ledger(
            LedgerEntry(
                order_id=order_id,
                kind=kind.value,
                stamps_after=self.stamps,
                free_drinks_after=self.free_drinks,
                recorded_at=now,
            )
        )
        return True

    def use_free_drink(self) -> int:
        """Spend a free drink at the counter. Returns the remaining balance."""
        from loyalty.customer.events import FreeDrinkRedeemed

        if self.free_drinks <= 0:
            raise ValidationError({"free_drinks": ["No free drinks available"]})

        self.free_drinks -= 1
        self.raise_(
            FreeDrinkRedeemed(
                customer_id=self.id,
                card_number=self.card_number,
                stamps=self.stamps,
                free_drinks=self.free_drinks,
            )
        )
        return self.free_drinks
