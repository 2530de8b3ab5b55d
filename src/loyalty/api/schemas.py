"""Pydantic request/response schemas for the Loyalty API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


class RegisterCustomerRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "نورة", "phone": "+966 50 123 4567"}]}}

    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=7, max_length=20)


class RegisteredCustomerResponse(BaseModel):
    customer_id: str
    card_number: str


class CustomerResponse(BaseModel):
    customer_id: str
    name: str
    phone: str
    card_number: str
    stamps: int
    free_drinks: int
    registered_at: str | None = None
    last_order_at: str | None = None


class LoyaltyCardResponse(BaseModel):
    card_number: str
    customer_id: str
    name: str
    stamps: int
    free_drinks: int


class FreeDrinkBalanceResponse(BaseModel):
    free_drinks: int
