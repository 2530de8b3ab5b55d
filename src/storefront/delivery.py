"""Delivery/fulfillment selector: how the current order reaches the customer.

The descriptor is validated strictly and replaced wholesale on every change:
pickup carries no fee and no destination, delivery needs an address with
coordinates, dine-in needs a table number.
"""

from decimal import Decimal
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from storefront import keys
from storefront.errors import InvalidDelivery
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


class Destination(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1, max_length=500)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    zone: str | None = Field(None, max_length=100)


class DeliveryDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal["pickup", "delivery", "dine_in"]
    fee: Decimal = Field(default=Decimal("0"), ge=0)
    branch_id: str | None = None
    branch_name: str | None = None
    destination: Destination | None = None
    table_number: str | None = None
    arrival_time: str | None = None

    @model_validator(mode="after")
    def details_match_mode(self):
        if self.mode == "pickup":
            if self.fee != 0:
                raise ValueError("pickup orders carry no delivery fee")
            if self.destination is not None or self.table_number:
                raise ValueError("pickup orders take no destination or table")
        elif self.mode == "delivery":
            if self.destination is None:
                raise ValueError("delivery orders need a destination")
            if "fee" not in self.model_fields_set:
                raise ValueError("delivery orders need the fee quoted for their zone")
            if self.table_number:
                raise ValueError("delivery orders take no table")
        elif self.mode == "dine_in":
            if not self.table_number:
                raise ValueError("dine-in orders need a table number")
            if self.fee != 0 or self.destination is not None:
                raise ValueError("dine-in orders carry no fee or destination")
        return self


def parse_descriptor(value) -> DeliveryDescriptor:
    if isinstance(value, DeliveryDescriptor):
        return value
    try:
        return DeliveryDescriptor.model_validate(value)
    except ValidationError as exc:
        raise InvalidDelivery(str(exc)) from None


class DeliverySelector:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def set_delivery(self, descriptor) -> DeliveryDescriptor:
        """Validate and persist a descriptor, replacing any previous choice."""
        parsed = parse_descriptor(descriptor)
        self.store.write_json(keys.DELIVERY_INFO, parsed.model_dump(mode="json"))
        return parsed

    def clear_delivery(self) -> None:
        self.store.remove(keys.DELIVERY_INFO)

    def current(self) -> DeliveryDescriptor | None:
        document = self.store.read_json(keys.DELIVERY_INFO)
        if document is None:
            return None
        try:
            return DeliveryDescriptor.model_validate(document)
        except ValidationError:
            logger.warning("Discarding invalid stored delivery choice")
            return None

    def delivery_fee(self) -> Decimal:
        descriptor = self.current()
        return descriptor.fee if descriptor is not None else Decimal("0")
