"""Catalogue lookup: menu data the storefront prices its cart against.

Prices are normalized at this boundary. An item whose price cannot be read
is logged and left out, so it contributes zero to any total.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

import structlog
from pydantic import BaseModel, field_validator

from shared.money import to_decimal
from storefront.errors import StorefrontError

logger = structlog.get_logger(__name__)


class CatalogItem(BaseModel):
    item_id: str
    name_ar: str
    name_en: str | None = None
    unit_price: Decimal
    previous_price: Decimal | None = None
    availability: str = "available"

    @field_validator("unit_price", mode="before")
    @classmethod
    def normalize_unit_price(cls, value):
        return to_decimal(value)

    @field_validator("previous_price", mode="before")
    @classmethod
    def normalize_previous_price(cls, value):
        return None if value is None else to_decimal(value)

    def display_name(self) -> str:
        return self.name_ar or self.name_en or self.item_id


def parse_catalog_item(document: dict) -> CatalogItem | None:
    """Read one menu document; None when its price or shape is malformed."""
    try:
        return CatalogItem(
            item_id=document["item_id"],
            name_ar=document.get("name_ar") or document["item_id"],
            name_en=document.get("name_en"),
            unit_price=document.get("price"),
            previous_price=document.get("previous_price"),
            availability=document.get("availability") or "available",
        )
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Dropping malformed menu item", item_id=document.get("item_id"), error=str(exc))
        return None


class CatalogueLookup(ABC):
    """Abstract interface for menu lookups."""

    @abstractmethod
    def items(self, item_ids) -> dict[str, CatalogItem]:
        """Return the resolvable items among ``item_ids``, keyed by id."""
        ...

    def prices_for(self, item_ids) -> dict[str, Decimal]:
        return {item_id: item.unit_price for item_id, item in self.items(item_ids).items()}


class StaticCatalogue(CatalogueLookup):
    """A fixed menu, given as menu documents."""

    def __init__(self, documents: list[dict]):
        parsed = (parse_catalog_item(document) for document in documents)
        self._items = {item.item_id: item for item in parsed if item is not None}

    def items(self, item_ids) -> dict[str, CatalogItem]:
        return {item_id: self._items[item_id] for item_id in item_ids if item_id in self._items}


class ApiCatalogue(CatalogueLookup):
    """Menu lookups through the Catalogue API."""

    def __init__(self, api):
        self.api = api

    def items(self, item_ids) -> dict[str, CatalogItem]:
        item_ids = list(item_ids)
        if not item_ids:
            return {}
        try:
            documents = self.api.menu_items(item_ids)
        except StorefrontError as exc:
            logger.warning("Menu lookup failed, pricing as unresolved", error=str(exc))
            return {}

        parsed = (parse_catalog_item(document) for document in documents)
        return {item.item_id: item for item in parsed if item is not None and item.item_id in item_ids}
