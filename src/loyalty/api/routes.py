"""FastAPI routes for the Loyalty domain: customers and their cards."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from loyalty.api.schemas import (
    CustomerResponse,
    FreeDrinkBalanceResponse,
    LoyaltyCardResponse,
    RegisteredCustomerResponse,
    RegisterCustomerRequest,
)
from loyalty.customer.customer import Customer
from loyalty.customer.registration import RegisterCustomer, find_by_phone
from loyalty.customer.rewards import UseFreeDrink
from loyalty.projections.loyalty_card import LoyaltyCard

customer_router = APIRouter(prefix="/customers", tags=["customers"])
card_router = APIRouter(prefix="/cards", tags=["cards"])


def _customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        customer_id=str(customer.id),
        name=customer.name,
        phone=customer.phone,
        card_number=customer.card_number,
        stamps=customer.stamps,
        free_drinks=customer.free_drinks,
        registered_at=customer.registered_at.isoformat() if customer.registered_at else None,
        last_order_at=customer.last_order_at.isoformat() if customer.last_order_at else None,
    )


@customer_router.post("", status_code=201, response_model=RegisteredCustomerResponse)
async def register_customer(body: RegisterCustomerRequest) -> RegisteredCustomerResponse:
    result = current_domain.process(RegisterCustomer(name=body.name, phone=body.phone), asynchronous=False)
    return RegisteredCustomerResponse(**result)


@customer_router.get("", response_model=CustomerResponse)
async def find_customer(phone: str) -> CustomerResponse:
    customer = find_by_phone(phone)
    if customer is None:
        raise HTTPException(status_code=404, detail="No customer with this phone number")
    return _customer_response(customer)


@customer_router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str) -> CustomerResponse:
    try:
        customer = current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found") from None
    return _customer_response(customer)


@customer_router.post("/{customer_id}/free-drinks/redeem", response_model=FreeDrinkBalanceResponse)
async def redeem_free_drink(customer_id: str) -> FreeDrinkBalanceResponse:
    remaining = current_domain.process(UseFreeDrink(customer_id=customer_id), asynchronous=False)
    return FreeDrinkBalanceResponse(free_drinks=remaining)


@card_router.get("/{card_number}", response_model=LoyaltyCardResponse)
async def get_card(card_number: str) -> LoyaltyCardResponse:
    try:
        card = current_domain.repository_for(LoyaltyCard).get(card_number)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Card {card_number} not found") from None
    return LoyaltyCardResponse(
        card_number=card.card_number,
        customer_id=card.customer_id,
        name=card.name,
        stamps=card.stamps,
        free_drinks=card.free_drinks,
    )
