"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, StrictInt


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class DestinationSchema(BaseModel):
    address: str = Field(..., max_length=500)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    zone: str | None = Field(None, max_length=100)


class FulfillmentSchema(BaseModel):
    mode: Literal["pickup", "delivery", "dine_in"]
    fee: Decimal = Field(default=Decimal("0"), ge=0)
    branch_id: str | None = None
    branch_name: str | None = None
    destination: DestinationSchema | None = None
    table_number: str | None = None
    arrival_time: str | None = None


class CartLineSchema(BaseModel):
    item_id: str
    quantity: int


class OrderLineSchema(BaseModel):
    item_id: str
    display_name: str
    quantity: int
    unit_price: str


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "session-1760000000000-k3j9x2m1q",
                    "item_id": "espresso-single",
                    "quantity": 2,
                }
            ]
        }
    }

    session_id: str = Field(..., max_length=100)
    item_id: str = Field(..., max_length=100)
    quantity: StrictInt = Field(default=1, ge=1)


class SetQuantityRequest(BaseModel):
    quantity: StrictInt  # Zero or less removes the line


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "session-1760000000000-k3j9x2m1q",
                    "customer_id": None,
                    "fulfillment": {"mode": "pickup", "fee": 0, "branch_id": "olaya"},
                    "payment_method": "cash",
                    "free_drink_item_id": None,
                }
            ]
        }
    }

    session_id: str = Field(..., max_length=100)
    customer_id: str | None = None
    fulfillment: FulfillmentSchema
    payment_method: str = Field(default="cash", max_length=30)
    free_drink_item_id: str | None = None


class AdvanceStatusRequest(BaseModel):
    status: str = Field(..., max_length=30)


class CancelOrderRequest(BaseModel):
    reason: str = Field(..., max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    session_id: str
    lines: list[CartLineSchema]
    total_item_count: int
    subtotal: str


class PlacedOrderResponse(BaseModel):
    order_id: str
    order_number: str


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    session_id: str
    customer_id: str | None = None
    status: str
    lines: list[OrderLineSchema]
    fulfillment: dict
    subtotal: str
    delivery_fee: str
    free_drink_discount: str
    total_amount: str
    payment_method: str
    used_free_drink: bool
    cancellation_reason: str | None = None
    created_at: str | None = None


class OrderSummaryResponse(BaseModel):
    order_id: str
    order_number: str
    status: str
    lines: list[OrderLineSchema]
    item_count: int
    total_amount: str
    payment_method: str | None = None
    used_free_drink: bool = False
    fulfillment_mode: str | None = None
    placed_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderSummaryResponse]


class StatusResponse(BaseModel):
    status: str = "ok"
