"""Pydantic request/response schemas for the Catalogue API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Prices may arrive as numbers, numeric strings or
``{"$numberDecimal": "..."}`` objects and are normalized here.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from shared.money import PriceFormatError, to_decimal


def _normalize_price(value: Any) -> Decimal:
    try:
        return to_decimal(value)
    except PriceFormatError as exc:
        raise ValueError(str(exc)) from None


# --- Menu Item Request Schemas ---


class AddMenuItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "item_id": "espresso-single",
                    "name_ar": "إسبريسو",
                    "name_en": "Espresso",
                    "category": "hot",
                    "price": "4.00",
                    "previous_price": None,
                    "availability": "available",
                }
            ]
        }
    }

    item_id: str = Field(..., max_length=100)
    name_ar: str = Field(..., max_length=200)
    name_en: str | None = Field(None, max_length=200)
    description_ar: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=20)
    price: Decimal
    previous_price: Decimal | None = None
    availability: str | None = Field(None, max_length=30)

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, value: Any) -> Decimal:
        return _normalize_price(value)

    @field_validator("previous_price", mode="before")
    @classmethod
    def normalize_previous_price(cls, value: Any) -> Decimal | None:
        if value is None:
            return None
        return _normalize_price(value)


class ChangePriceRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 17.5}]}}

    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, value: Any) -> Decimal:
        return _normalize_price(value)


class ChangeAvailabilityRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"availability": "out_of_stock"}]}}

    availability: str = Field(..., max_length=30)


# --- Response Schemas ---


class MenuItemIdResponse(BaseModel):
    item_id: str


class MenuItemResponse(BaseModel):
    item_id: str
    name_ar: str
    name_en: str | None = None
    description_ar: str | None = None
    category: str | None = None
    price: str
    previous_price: str | None = None
    discount_percentage: int = 0
    availability: str


class MenuItemListResponse(BaseModel):
    items: list[MenuItemResponse]


class StatusResponse(BaseModel):
    status: str = "ok"
