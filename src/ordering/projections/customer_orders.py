"""Customer orders: the order feed behind "my orders" and status tracking.

One row per order, queryable by customer id for registered customers and by
session id for guests.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.order import Order


@ordering.projection
class CustomerOrder:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True)
    session_id = String(required=True)
    customer_id = Identifier()
    status = String(required=True)
    lines = Text()  # JSON: list of {item_id, display_name, quantity, unit_price}
    item_count = Integer(default=0)
    fulfillment_mode = String()
    payment_method = String()
    used_free_drink = Boolean(default=False)
    total_amount = Float(default=0.0)
    cancellation_reason = String()
    placed_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=CustomerOrder, aggregates=[Order])
class CustomerOrderProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(CustomerOrder).add(
            CustomerOrder(
                order_id=event.order_id,
                order_number=event.order_number,
                session_id=event.session_id,
                customer_id=event.customer_id,
                status="pending",
                lines=event.lines,
                item_count=event.item_count,
                fulfillment_mode=event.fulfillment_mode,
                payment_method=event.payment_method,
                used_free_drink=event.used_free_drink,
                total_amount=event.total_amount,
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(CustomerOrder)
        try:
            view = repo.get(event.order_id)
        except ObjectNotFoundError:
            return
        view.status = event.new_status
        view.updated_at = event.changed_at
        repo.add(view)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        repo = current_domain.repository_for(CustomerOrder)
        try:
            view = repo.get(event.order_id)
        except ObjectNotFoundError:
            return
        view.status = "cancelled"
        view.cancellation_reason = event.reason
        view.updated_at = event.cancelled_at
        repo.add(view)


def orders_for(**criteria) -> list:
    """Orders matching ``customer_id=`` or ``session_id=``, most recent first."""
    query = current_domain.repository_for(CustomerOrder)._dao.query.filter(**criteria)
    return query.order_by("-placed_at").limit(None).all().items
