"""Shopping Cart aggregate (CQRS): the authoritative cart for a storefront session.

The cart is identified by the session id the storefront generated, so a
visitor needs no account to shop. Lines are keyed by menu item id; the cart
never stores prices, which are resolved from the mirrored menu at display and
checkout time.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import CartCleared, CartLineAdded, CartLineQuantitySet, CartLineRemoved
from ordering.domain import ordering


def _require_positive_int(quantity, field="quantity"):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({field: [f"Quantity must be a positive whole number, got {quantity!r}"]})


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    session_id = Identifier(identifier=True, required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, item_id):
        return next((line for line in self.lines if str(line.item_id) == str(item_id)), None)

    def total_item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, item_id, quantity=1):
        """Add an item to the cart, merging into an existing line for the same item."""
        _require_positive_int(quantity)

        now = datetime.now(UTC)
        existing = self.line_for(item_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_lines(CartLine(item_id=item_id, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartLineAdded(
                session_id=str(self.session_id),
                item_id=str(item_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_quantity(self, item_id, quantity):
        """Overwrite a line's quantity. Zero or less removes the line.

        Setting a positive quantity on an item that is not in the cart creates
        the line, so concurrent writers converge on the last write.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError({"quantity": [f"Quantity must be a whole number, got {quantity!r}"]})

        if quantity <= 0:
            self.remove_item(item_id)
            return

        now = datetime.now(UTC)
        existing = self.line_for(item_id)
        if existing:
            previous_quantity = existing.quantity
            if previous_quantity == quantity:
                return
            existing.quantity = quantity
        else:
            previous_quantity = 0
            self.add_lines(CartLine(item_id=item_id, quantity=quantity, added_at=now))

        self.updated_at = now

        self.raise_(
            CartLineQuantitySet(
                session_id=str(self.session_id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        """Remove an item's line. Removing an absent item changes nothing."""
        existing = self.line_for(item_id)
        if existing is None:
            return

        self.remove_lines(existing)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                session_id=str(self.session_id),
                item_id=str(item_id),
            )
        )

    def clear(self):
        """Remove every line."""
        if not self.lines:
            return

        removed = len(self.lines)
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                session_id=str(self.session_id),
                removed_line_count=removed,
            )
        )
