"""Order aggregate (CQRS): a submitted coffee order.

An order snapshots the cart lines with the prices resolved at checkout, the
fulfillment choice (pickup, delivery or dine-in) and the loyalty redemption,
then moves through the shop's preparation workflow.

State Machine:
    PENDING → PAYMENT_CONFIRMED → IN_PROGRESS → READY → COMPLETED
    PENDING → IN_PROGRESS (pay at the counter)
    READY → OUT_FOR_DELIVERY → COMPLETED (delivery orders only)
    CANCELLED (from PENDING, PAYMENT_CONFIRMED, IN_PROGRESS)
"""

import json
import secrets
import time
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from shared.money import CURRENCY, ZERO, to_decimal


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PAYMENT_CONFIRMED = "payment_confirmed"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class FulfillmentMode(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    DINE_IN = "dine_in"


class PaymentMethod(Enum):
    CASH = "cash"
    ALINMA = "alinma"
    UR = "ur"
    BARQ = "barq"
    RAJHI = "rajhi"
    QAHWA_CARD = "qahwa-card"
    POS = "pos"
    DELIVERY = "delivery"
    APPLE_PAY = "apple_pay"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAYMENT_CONFIRMED, OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.PAYMENT_CONFIRMED: {OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.IN_PROGRESS: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.COMPLETED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def generate_order_number() -> str:
    return f"ORD-{int(time.time() * 1000)}-{secrets.token_hex(2).upper()}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Fulfillment:
    """How the order reaches the customer, captured at checkout.

    Pickup orders carry no fee and no destination. Delivery orders need an
    address with coordinates. Dine-in orders need a table number.
    """

    mode = String(required=True, choices=FulfillmentMode)
    fee = Float(default=0.0, min_value=0.0)
    branch_id = String(max_length=100)
    branch_name = String(max_length=200)
    address = String(max_length=500)
    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)
    zone = String(max_length=100)
    table_number = String(max_length=20)
    arrival_time = String(max_length=50)

    @invariant.post
    def details_must_match_mode(self):
        if self.mode not in {mode.value for mode in FulfillmentMode}:
            return
        mode = FulfillmentMode(self.mode)
        if mode == FulfillmentMode.PICKUP:
            if self.fee:
                raise ValidationError({"fee": ["Pickup orders carry no delivery fee"]})
            if self.address or self.table_number:
                raise ValidationError({"mode": ["Pickup orders take no address or table"]})
        elif mode == FulfillmentMode.DELIVERY:
            if not self.address or self.latitude is None or self.longitude is None:
                raise ValidationError({"address": ["Delivery orders need an address with coordinates"]})
        elif mode == FulfillmentMode.DINE_IN:
            if not self.table_number:
                raise ValidationError({"table_number": ["Dine-in orders need a table number"]})
            if self.fee:
                raise ValidationError({"fee": ["Dine-in orders carry no delivery fee"]})


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked at checkout. ``total_amount = subtotal + delivery_fee - free_drink_discount``."""

    subtotal = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    free_drink_discount = Float(default=0.0)
    total_amount = Float(default=0.0)
    currency = String(max_length=3, default=CURRENCY)


def fulfillment_from_payload(payload) -> Fulfillment:
    """Build a Fulfillment from the storefront's delivery descriptor."""
    if not payload:
        raise ValidationError({"fulfillment": ["A fulfillment choice is required"]})
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            raise ValidationError({"fulfillment": ["Fulfillment must be valid JSON"]}) from None

    destination = payload.get("destination") or {}
    return Fulfillment(
        mode=payload.get("mode"),
        fee=float(to_decimal(payload.get("fee") or 0)),
        branch_id=payload.get("branch_id"),
        branch_name=payload.get("branch_name"),
        address=destination.get("address"),
        latitude=destination.get("latitude"),
        longitude=destination.get("longitude"),
        zone=destination.get("zone"),
        table_number=payload.get("table_number"),
        arrival_time=payload.get("arrival_time"),
    )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A menu item and quantity, priced at checkout."""

    item_id = Identifier(required=True)
    display_name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    session_id = String(required=True, max_length=100)
    customer_id = Identifier()  # Absent for guest orders
    lines = HasMany(OrderLine)
    fulfillment = ValueObject(Fulfillment)
    pricing = ValueObject(OrderPricing)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH.value)
    used_free_drink = Boolean(default=False)
    free_drink_item_id = Identifier()
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        session_id,
        lines_data,
        fulfillment,
        payment_method=None,
        customer_id=None,
        free_drink_item_id=None,
    ):
        """Create an order from priced cart lines.

        Args:
            session_id: The storefront session that built the cart.
            lines_data: List of dicts with item_id, display_name, quantity, unit_price.
            fulfillment: A Fulfillment value object.
            payment_method: One of PaymentMethod values; cash when omitted.
            customer_id: The registered customer, or None for a guest.
            free_drink_item_id: Item whose single unit is paid with a free drink.
                The card balance lives in Loyalty; callers must confirm the
                customer has a free drink before placing the order.
        """
        if not lines_data:
            raise ValidationError({"lines": ["Cannot place an order from an empty cart"]})

        subtotal = sum((to_decimal(line["unit_price"]) * line["quantity"] for line in lines_data), ZERO)
        delivery_fee = to_decimal(fulfillment.fee or 0)

        free_drink_discount = ZERO
        if free_drink_item_id:
            if not customer_id:
                raise ValidationError({"free_drink_item_id": ["Guests cannot redeem free drinks"]})
            redeemed = next((line for line in lines_data if str(line["item_id"]) == str(free_drink_item_id)), None)
            if redeemed is None:
                raise ValidationError({"free_drink_item_id": ["The free drink must be one of the ordered items"]})
            free_drink_discount = to_decimal(redeemed["unit_price"])

        total_amount = subtotal + delivery_fee - free_drink_discount
        now = datetime.now(UTC)

        order = cls(
            order_number=generate_order_number(),
            session_id=session_id,
            customer_id=customer_id,
            lines=[
                OrderLine(
                    item_id=line["item_id"],
                    display_name=line["display_name"],
                    quantity=line["quantity"],
                    unit_price=float(to_decimal(line["unit_price"])),
                )
                for line in lines_data
            ],
            fulfillment=fulfillment,
            pricing=OrderPricing(
                subtotal=float(subtotal),
                delivery_fee=float(delivery_fee),
                free_drink_discount=float(free_drink_discount),
                total_amount=float(total_amount),
            ),
            payment_method=payment_method or PaymentMethod.CASH.value,
            used_free_drink=bool(free_drink_item_id),
            free_drink_item_id=free_drink_item_id,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                session_id=session_id,
                customer_id=str(customer_id) if customer_id else None,
                lines=json.dumps(order.lines_snapshot(), ensure_ascii=False),
                item_count=sum(line["quantity"] for line in lines_data),
                fulfillment_mode=fulfillment.mode,
                payment_method=order.payment_method,
                used_free_drink=order.used_free_drink,
                total_amount=float(total_amount),
                placed_at=now,
            )
        )
        return order

    def lines_snapshot(self) -> list[dict]:
        return [
            {
                "item_id": str(line.item_id),
                "display_name": line.display_name,
                "quantity": line.quantity,
                "unit_price": str(to_decimal(line.unit_price)),
            }
            for line in self.lines
        ]

    def total_amount(self) -> Decimal:
        return to_decimal(self.pricing.total_amount)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def advance_to(self, status):
        """Move the order forward in the preparation workflow."""
        try:
            target = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None

        if target == OrderStatus.CANCELLED:
            raise ValidationError({"status": ["Use cancel() to cancel an order"]})
        self._assert_can_transition(target)
        if target == OrderStatus.OUT_FOR_DELIVERY and self.fulfillment.mode != FulfillmentMode.DELIVERY.value:
            raise ValidationError({"status": ["Only delivery orders go out for delivery"]})

        previous = self.status
        self.status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=self.status,
                changed_at=self.updated_at,
            )
        )

    def cancel(self, reason):
        self._assert_can_transition(OrderStatus.CANCELLED)

        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id) if self.customer_id else None,
                reason=reason,
                cancelled_at=self.updated_at,
            )
        )
