"""FastAPI routes for the Ordering domain: session carts, orders and order feeds."""

import json

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    AdvanceStatusRequest,
    CancelOrderRequest,
    CartLineSchema,
    CartResponse,
    OrderLineSchema,
    OrderListResponse,
    OrderResponse,
    OrderSummaryResponse,
    PlacedOrderResponse,
    PlaceOrderRequest,
    SetQuantityRequest,
    StatusResponse,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, RemoveFromCart, SetCartQuantity
from ordering.cart.management import ClearCart
from ordering.cart.pricing import current_price_list, price_lines
from ordering.order.lifecycle import AdvanceOrderStatus, CancelOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.projections.customer_orders import orders_for
from shared.money import to_decimal


def _cart_response(session_id: str) -> CartResponse:
    """Read the authoritative cart. A session without a cart has an empty one."""
    try:
        cart = current_domain.repository_for(ShoppingCart).get(session_id)
        lines = list(cart.lines)
    except ObjectNotFoundError:
        lines = []

    lines = sorted(lines, key=lambda line: line.added_at.timestamp() if line.added_at else 0.0)
    subtotal = price_lines(lines, current_price_list(line.item_id for line in lines))
    return CartResponse(
        session_id=session_id,
        lines=[CartLineSchema(item_id=str(line.item_id), quantity=line.quantity) for line in lines],
        total_item_count=sum(line.quantity for line in lines),
        subtotal=str(subtotal),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session_id: str) -> CartResponse:
    return _cart_response(session_id)


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest) -> CartResponse:
    command = AddToCart(
        session_id=body.session_id,
        item_id=body.item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(body.session_id)


@cart_router.put("/{session_id}/{item_id}", response_model=CartResponse)
async def set_cart_quantity(session_id: str, item_id: str, body: SetQuantityRequest) -> CartResponse:
    command = SetCartQuantity(
        session_id=session_id,
        item_id=item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_id)


@cart_router.delete("/{session_id}/{item_id}", response_model=CartResponse)
async def remove_from_cart(session_id: str, item_id: str) -> CartResponse:
    command = RemoveFromCart(session_id=session_id, item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_id)


@cart_router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(session_id: str) -> CartResponse:
    current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
    return _cart_response(session_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order: Order) -> OrderResponse:
    fulfillment = order.fulfillment
    return OrderResponse(
        order_id=str(order.id),
        order_number=order.order_number,
        session_id=order.session_id,
        customer_id=str(order.customer_id) if order.customer_id else None,
        status=order.status,
        lines=[OrderLineSchema(**line) for line in order.lines_snapshot()],
        fulfillment={
            "mode": fulfillment.mode,
            "fee": str(to_decimal(fulfillment.fee or 0)),
            "branch_id": fulfillment.branch_id,
            "branch_name": fulfillment.branch_name,
            "address": fulfillment.address,
            "latitude": fulfillment.latitude,
            "longitude": fulfillment.longitude,
            "zone": fulfillment.zone,
            "table_number": fulfillment.table_number,
            "arrival_time": fulfillment.arrival_time,
        },
        subtotal=str(to_decimal(order.pricing.subtotal)),
        delivery_fee=str(to_decimal(order.pricing.delivery_fee)),
        free_drink_discount=str(to_decimal(order.pricing.free_drink_discount)),
        total_amount=str(order.total_amount()),
        payment_method=order.payment_method,
        used_free_drink=bool(order.used_free_drink),
        cancellation_reason=order.cancellation_reason,
        created_at=order.created_at.isoformat() if order.created_at else None,
    )


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(body: PlaceOrderRequest) -> PlacedOrderResponse:
    command = PlaceOrder(
        session_id=body.session_id,
        customer_id=body.customer_id,
        fulfillment=body.fulfillment.model_dump_json(),
        payment_method=body.payment_method,
        free_drink_item_id=body.free_drink_item_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return PlacedOrderResponse(**result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found") from None
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def advance_order_status(order_id: str, body: AdvanceStatusRequest) -> StatusResponse:
    current_domain.process(AdvanceOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    current_domain.process(CancelOrder(order_id=order_id, reason=body.reason), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order feeds
# ---------------------------------------------------------------------------
feed_router = APIRouter(tags=["order-feeds"])


def _order_list(records) -> OrderListResponse:
    return OrderListResponse(
        orders=[
            OrderSummaryResponse(
                order_id=str(record.order_id),
                order_number=record.order_number,
                status=record.status,
                lines=[OrderLineSchema(**line) for line in json.loads(record.lines or "[]")],
                item_count=record.item_count or 0,
                total_amount=str(to_decimal(record.total_amount or 0)),
                payment_method=record.payment_method,
                used_free_drink=bool(record.used_free_drink),
                fulfillment_mode=record.fulfillment_mode,
                placed_at=record.placed_at.isoformat() if record.placed_at else None,
            )
            for record in records
        ]
    )


@feed_router.get("/customers/{customer_id}/orders", response_model=OrderListResponse)
async def list_customer_orders(customer_id: str) -> OrderListResponse:
    return _order_list(orders_for(customer_id=customer_id))


@feed_router.get("/sessions/{session_id}/orders", response_model=OrderListResponse)
async def list_session_orders(session_id: str) -> OrderListResponse:
    return _order_list(orders_for(session_id=session_id))
