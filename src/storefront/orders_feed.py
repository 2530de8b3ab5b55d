"""Order status feed: polls the server and reports status changes."""

import threading

import structlog
from pydantic import BaseModel

from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)

POLL_INTERVAL_SECONDS = 5.0


class StatusChange(BaseModel):
    order_id: str
    order_number: str
    previous_status: str | None
    status: str


class OrderFeed:
    """Follows the orders of one customer, or of one guest session."""

    def __init__(self, api, customer_id=None, session_id=None, interval: float = POLL_INTERVAL_SECONDS):
        if (customer_id is None) == (session_id is None):
            raise ValueError("Follow either a customer_id or a session_id")
        self.api = api
        self.customer_id = customer_id
        self.session_id = session_id
        self.interval = interval
        self._known: dict[str, str] | None = None

    def fetch(self) -> list[dict]:
        if self.customer_id is not None:
            return self.api.customer_orders(self.customer_id)
        return self.api.session_orders(self.session_id)

    def poll(self) -> list[StatusChange]:
        """Return orders that are new or changed status since the previous poll.

        The first poll only records the current statuses.
        """
        orders = self.fetch()
        previous = self._known
        self._known = {order["order_id"]: order["status"] for order in orders}
        if previous is None:
            return []

        return [
            StatusChange(
                order_id=order["order_id"],
                order_number=order["order_number"],
                previous_status=previous.get(order["order_id"]),
                status=order["status"],
            )
            for order in orders
            if previous.get(order["order_id"]) != order["status"]
        ]

    def watch(self, on_change, stop_event: threading.Event) -> None:
        """Poll every ``interval`` seconds until ``stop_event`` is set."""
        while not stop_event.is_set():
            try:
                for change in self.poll():
                    on_change(change)
            except StorefrontError as exc:
                logger.warning("Order feed poll failed", error=str(exc))
            stop_event.wait(self.interval)
