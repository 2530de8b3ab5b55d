"""Inbound cross-domain event handler: Loyalty reacts to Ordering events.

Every order placed by a registered customer lands on their card: a stamp for
a paid order, or the spending of a free drink when one was redeemed at
checkout. Guest orders carry no customer id and never touch a card.

Cross-domain events are imported from shared.events.ordering and registered
as external events via loyalty.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from loyalty.customer.customer import Customer
from loyalty.domain import loyalty
from shared.events.ordering import OrderPlaced

logger = structlog.get_logger(__name__)

# Register external event so Protean can deserialize it
loyalty.register_external_event(OrderPlaced, "Ordering.OrderPlaced.v1")


@loyalty.event_handler(part_of=Customer, stream_category="ordering::order")
class OrderingLoyaltyEventHandler:
    """Applies placed orders to the customer's loyalty card."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.customer_id:
            logger.debug("Guest order, no loyalty card to update", order_id=str(event.order_id))
            return

        repo = current_domain.repository_for(Customer)
        try:
            customer = repo.get(str(event.customer_id))
        except ObjectNotFoundError:
            logger.warning(
                "Order placed for unknown loyalty customer",
                order_id=str(event.order_id),
                customer_id=str(event.customer_id),
            )
            return

        if customer.record_completed_order(order_id=str(event.order_id), used_free_drink=event.used_free_drink):
            repo.add(customer)
            logger.info(
                "Loyalty card updated",
                customer_id=str(customer.id),
                card_number=customer.card_number,
                stamps=customer.stamps,
                free_drinks=customer.free_drinks,
            )
        else:
            logger.info("Order already on loyalty card", order_id=str(event.order_id))
