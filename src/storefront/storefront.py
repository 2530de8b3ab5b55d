"""Storefront facade: wires the local components and reports every action as an Outcome.

Screens call the facade, never the components directly. Each action returns
an :class:`Outcome` carrying a bilingual notice instead of raising, so a
failed request shows a message and leaves the local state as it was.
"""

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from storefront.account import CustomerAccount
from storefront.api import StorefrontApi
from storefront.cart import Cart
from storefront.catalogue import ApiCatalogue, CatalogueLookup
from storefront.checkout import Checkout
from storefront.delivery import DeliverySelector
from storefront.errors import (
    EmptyCart,
    InvalidDelivery,
    InvalidQuantity,
    MissingFulfillment,
    NoFreeDrinks,
    NotRegistered,
    ServiceUnavailable,
    StorefrontError,
)
from storefront.history import OrderHistory
from storefront.messages import Notice, notice
from storefront.orders_feed import OrderFeed
from storefront.session import SessionIdentityProvider
from storefront.storage import get_store
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


class Outcome(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    notice: Notice
    value: Any = None


def _failure(key: str, exc: StorefrontError) -> Outcome:
    if isinstance(exc, ServiceUnavailable):
        return Outcome(ok=False, notice=notice("service.unavailable"))
    return Outcome(ok=False, notice=notice(key, detail=str(exc)))


class Storefront:
    def __init__(
        self,
        api: StorefrontApi | None = None,
        store: KeyValueStore | None = None,
        catalogue: CatalogueLookup | None = None,
    ):
        self.api = api if api is not None else StorefrontApi()
        self.store = store if store is not None else get_store()
        self.session = SessionIdentityProvider(self.store)
        self.delivery = DeliverySelector(self.store)
        self.history = OrderHistory(self.store)
        self.catalogue = catalogue if catalogue is not None else ApiCatalogue(self.api)
        self.account = CustomerAccount(self.api, self.store)
        self.cart = Cart(self.api, self.session, self.delivery, self.catalogue)
        self.checkout = Checkout(self.api, self.cart, self.delivery, self.history, self.account)

    def order_feed(self, interval: float | None = None) -> OrderFeed:
        """Follow the signed-in customer's orders, or this session's orders for guests."""
        kwargs = {} if interval is None else {"interval": interval}
        customer_id = self.account.customer_id()
        if customer_id is not None:
            return OrderFeed(self.api, customer_id=customer_id, **kwargs)
        return OrderFeed(self.api, session_id=self.session.get_or_create_session_id(), **kwargs)

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, item_id: str, quantity: int = 1) -> Outcome:
        try:
            lines = self.cart.add_item(item_id, quantity)
        except InvalidQuantity:
            return Outcome(ok=False, notice=notice("cart.invalid_quantity"))
        except StorefrontError as exc:
            return _failure("cart.failed", exc)
        return Outcome(ok=True, notice=notice("cart.added"), value=lines)

    def update_quantity(self, item_id: str, quantity: int) -> Outcome:
        try:
            lines = self.cart.set_quantity(item_id, quantity)
        except InvalidQuantity:
            return Outcome(ok=False, notice=notice("cart.invalid_quantity"))
        except StorefrontError as exc:
            return _failure("cart.failed", exc)
        return Outcome(ok=True, notice=notice("cart.updated"), value=lines)

    def remove_from_cart(self, item_id: str) -> Outcome:
        try:
            lines = self.cart.remove_item(item_id)
        except StorefrontError as exc:
            return _failure("cart.failed", exc)
        return Outcome(ok=True, notice=notice("cart.removed"), value=lines)

    def clear_cart(self) -> Outcome:
        try:
            lines = self.cart.clear()
        except StorefrontError as exc:
            return _failure("cart.failed", exc)
        return Outcome(ok=True, notice=notice("cart.cleared"), value=lines)

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def choose_delivery(self, descriptor) -> Outcome:
        try:
            parsed = self.delivery.set_delivery(descriptor)
        except InvalidDelivery:
            return Outcome(ok=False, notice=notice("delivery.invalid"))
        return Outcome(ok=True, notice=notice("delivery.saved"), value=parsed)

    def submit_order(self, payment_method: str = "cash", free_drink_item_id: str | None = None) -> Outcome:
        try:
            record = self.checkout.submit(payment_method=payment_method, free_drink_item_id=free_drink_item_id)
        except MissingFulfillment:
            return Outcome(ok=False, notice=notice("order.missing_fulfillment"))
        except EmptyCart:
            return Outcome(ok=False, notice=notice("order.empty_cart"))
        except NotRegistered:
            return Outcome(ok=False, notice=notice("loyalty.guest"))
        except NoFreeDrinks:
            return Outcome(ok=False, notice=notice("loyalty.no_free_drinks"))
        except StorefrontError as exc:
            logger.warning("Order submission failed", error=str(exc))
            return _failure("order.failed", exc)
        return Outcome(ok=True, notice=notice("order.placed", order_number=record.order_number), value=record)

    # -------------------------------------------------------------------
    # Loyalty
    # -------------------------------------------------------------------
    def register(self, name: str, phone: str) -> Outcome:
        try:
            profile = self.account.register(name, phone)
        except StorefrontError as exc:
            return _failure("account.failed", exc)
        return Outcome(
            ok=True,
            notice=notice("account.registered", name=profile.name, card_number=profile.card_number),
            value=profile,
        )

    def redeem_free_drink(self) -> Outcome:
        try:
            result = self.account.use_free_drink()
        except NotRegistered:
            return Outcome(ok=False, notice=notice("loyalty.guest"))
        except StorefrontError as exc:
            return _failure("loyalty.failed", exc)
        if not result.success:
            return Outcome(ok=False, notice=notice("loyalty.no_free_drinks"), value=result)
        return Outcome(ok=True, notice=notice("loyalty.redeemed"), value=result)
