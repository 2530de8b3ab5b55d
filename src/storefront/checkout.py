"""Checkout: submit the cart with its delivery choice and remember the order locally."""

from datetime import UTC, datetime

import structlog

from storefront.account import CustomerAccount
from storefront.cart import Cart
from storefront.delivery import DeliverySelector
from storefront.errors import EmptyCart, MissingFulfillment, NoFreeDrinks, NotRegistered
from storefront.history import LocalOrderItem, LocalOrderRecord, OrderHistory

logger = structlog.get_logger(__name__)


class Checkout:
    def __init__(
        self,
        api,
        cart: Cart,
        delivery: DeliverySelector,
        history: OrderHistory,
        account: CustomerAccount,
    ):
        self.api = api
        self.cart = cart
        self.delivery = delivery
        self.history = history
        self.account = account

    def submit(self, payment_method: str = "cash", free_drink_item_id: str | None = None) -> LocalOrderRecord:
        """Place the order. The cart and delivery choice are cleared on success."""
        descriptor = self.delivery.current()
        if descriptor is None:
            raise MissingFulfillment("Choose pickup, delivery or dine-in first")
        if not self.cart.refresh():
            raise EmptyCart("The cart is empty")

        customer_id = self.account.customer_id()
        if free_drink_item_id and customer_id is None:
            raise NotRegistered("Free drinks need a registered loyalty card")
        if free_drink_item_id:
            # Ordering has no view of the card; the balance must be checked before placing
            profile = self.account.refresh()
            if profile is None or profile.free_drinks <= 0:
                raise NoFreeDrinks("No free drinks on this loyalty card")

        placed = self.api.place_order(
            {
                "session_id": self.cart.session_id(),
                "customer_id": customer_id,
                "fulfillment": descriptor.model_dump(mode="json"),
                "payment_method": payment_method,
                "free_drink_item_id": free_drink_item_id,
            }
        )
        order = self.api.get_order(placed["order_id"])

        record = LocalOrderRecord(
            order_number=order["order_number"],
            items=[
                LocalOrderItem(
                    id=line["item_id"],
                    display_name=line["display_name"],
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                )
                for line in order["lines"]
            ],
            total_amount=order["total_amount"],
            payment_method=order["payment_method"],
            used_free_drink=order["used_free_drink"],
            created_at=order.get("created_at") or datetime.now(UTC).isoformat(),
        )
        self.history.append(record)

        self.delivery.clear_delivery()
        self.cart.invalidate()
        if customer_id is not None:
            self.account.refresh()

        logger.info("Order submitted", order_number=record.order_number, total_amount=str(record.total_amount))
        return record
