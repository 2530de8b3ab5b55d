"""Storefront cart: a read-through view of the server's session cart.

The server owns the cart. Every mutation is sent as a request and followed by
a refetch, so the local copy is only ever the server's latest answer. Nothing
is merged optimistically: two tabs editing the same session converge on the
last write.
"""

from decimal import Decimal

import structlog
from pydantic import BaseModel

from shared.money import ZERO
from storefront.catalogue import CatalogueLookup
from storefront.delivery import DeliverySelector
from storefront.errors import InvalidQuantity
from storefront.session import SessionIdentityProvider

logger = structlog.get_logger(__name__)


class CartLine(BaseModel):
    item_id: str
    quantity: int


def _require_whole_number(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}")
    return quantity


class Cart:
    def __init__(
        self,
        api,
        session: SessionIdentityProvider,
        delivery: DeliverySelector,
        catalogue: CatalogueLookup,
    ):
        self.api = api
        self.session = session
        self.delivery = delivery
        self.catalogue = catalogue
        self._lines: list[CartLine] | None = None

    def session_id(self) -> str:
        return self.session.get_or_create_session_id()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def invalidate(self) -> None:
        self._lines = None

    def refresh(self) -> list[CartLine]:
        document = self.api.get_cart(self.session_id())
        self._lines = [CartLine(item_id=line["item_id"], quantity=line["quantity"]) for line in document["lines"]]
        return list(self._lines)

    def lines(self) -> list[CartLine]:
        if self._lines is None:
            return self.refresh()
        return list(self._lines)

    def get_total_item_count(self) -> int:
        return sum(line.quantity for line in self.lines())

    def get_subtotal(self) -> Decimal:
        """Sum of ``unit_price * quantity``; items without a known price count as zero."""
        lines = self.lines()
        prices = self.catalogue.prices_for([line.item_id for line in lines])
        subtotal = ZERO
        for line in lines:
            unit_price = prices.get(line.item_id)
            if unit_price is None:
                logger.warning("Cart item has no price", item_id=line.item_id)
                continue
            subtotal += unit_price * line.quantity
        return subtotal

    def get_final_total(self) -> Decimal:
        return self.get_subtotal() + self.delivery.delivery_fee()

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, item_id: str, quantity: int = 1) -> list[CartLine]:
        if _require_whole_number(quantity) < 1:
            raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")

        self.invalidate()
        self.api.add_to_cart(self.session_id(), item_id, quantity)
        return self.refresh()

    def set_quantity(self, item_id: str, quantity: int) -> list[CartLine]:
        """Overwrite a line's quantity; zero or less removes the line."""
        if _require_whole_number(quantity) <= 0:
            return self.remove_item(item_id)

        self.invalidate()
        self.api.set_cart_quantity(self.session_id(), item_id, quantity)
        return self.refresh()

    def remove_item(self, item_id: str) -> list[CartLine]:
        self.invalidate()
        self.api.remove_from_cart(self.session_id(), item_id)
        return self.refresh()

    def clear(self) -> list[CartLine]:
        """Empty the cart and forget the delivery choice."""
        self.invalidate()
        self.api.clear_cart(self.session_id())
        self.delivery.clear_delivery()
        return self.refresh()
