"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddMenuItemRequest,
    ChangeAvailabilityRequest,
    ChangePriceRequest,
    MenuItemIdResponse,
    MenuItemListResponse,
    MenuItemResponse,
    StatusResponse,
)
from catalogue.menu.management import AddMenuItem, ChangeMenuItemAvailability, ChangeMenuItemPrice
from catalogue.menu.menu_item import MenuItem
from shared.money import to_decimal

menu_router = APIRouter(prefix="/menu-items", tags=["menu"])


def _to_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        item_id=str(item.item_id),
        name_ar=item.name_ar,
        name_en=item.name_en,
        description_ar=item.description_ar,
        category=item.category,
        price=str(to_decimal(item.price)),
        previous_price=str(to_decimal(item.previous_price)) if item.previous_price is not None else None,
        discount_percentage=item.discount_percentage(),
        availability=item.availability,
    )


# --- Menu endpoints ---


@menu_router.post("", status_code=201, response_model=MenuItemIdResponse)
async def add_menu_item(body: AddMenuItemRequest) -> MenuItemIdResponse:
    command = AddMenuItem(
        item_id=body.item_id,
        name_ar=body.name_ar,
        name_en=body.name_en,
        description_ar=body.description_ar,
        category=body.category,
        price=str(body.price),
        previous_price=str(body.previous_price) if body.previous_price is not None else None,
        availability=body.availability,
    )
    result = current_domain.process(command, asynchronous=False)
    return MenuItemIdResponse(item_id=result)


@menu_router.get("", response_model=MenuItemListResponse)
async def list_menu_items(ids: str | None = None, category: str | None = None) -> MenuItemListResponse:
    """List menu items, optionally restricted to a comma-separated set of ids."""
    query = current_domain.repository_for(MenuItem)._dao.query

    if ids:
        wanted = sorted({item_id.strip() for item_id in ids.split(",") if item_id.strip()})
        if not wanted:
            return MenuItemListResponse(items=[])
        query = query.filter(item_id__in=wanted)
    if category:
        query = query.filter(category=category)

    items = query.order_by("item_id").limit(None).all().items
    return MenuItemListResponse(items=[_to_response(item) for item in items])


@menu_router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: str) -> MenuItemResponse:
    try:
        item = current_domain.repository_for(MenuItem).get(item_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Menu item {item_id} not found") from None
    return _to_response(item)


@menu_router.put("/{item_id}/price", response_model=StatusResponse)
async def change_menu_item_price(item_id: str, body: ChangePriceRequest) -> StatusResponse:
    command = ChangeMenuItemPrice(item_id=item_id, new_price=float(body.price))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@menu_router.put("/{item_id}/availability", response_model=StatusResponse)
async def change_menu_item_availability(item_id: str, body: ChangeAvailabilityRequest) -> StatusResponse:
    command = ChangeMenuItemAvailability(item_id=item_id, availability=body.availability)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
