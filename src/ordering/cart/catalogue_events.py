"""Inbound cross-domain event handler: Ordering reacts to Catalogue events.

Keeps the MenuPrice projection in step with the menu. Carts themselves never
store prices; they are priced against this projection when displayed and at
checkout, so a price change reaches every open cart at once.

Cross-domain events are imported from shared.events.catalogue and registered
as external events via ordering.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.projections.menu_prices import MenuPrice
from shared.events.catalogue import MenuItemAdded, MenuItemAvailabilityChanged, MenuItemPriceChanged

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
ordering.register_external_event(MenuItemAdded, "Catalogue.MenuItemAdded.v1")
ordering.register_external_event(MenuItemPriceChanged, "Catalogue.MenuItemPriceChanged.v1")
ordering.register_external_event(MenuItemAvailabilityChanged, "Catalogue.MenuItemAvailabilityChanged.v1")


@ordering.event_handler(part_of=ShoppingCart, stream_category="catalogue::menu_item")
class CatalogueMenuEventHandler:
    """Mirrors menu prices and availability into the MenuPrice projection."""

    @handle(MenuItemAdded)
    def on_menu_item_added(self, event: MenuItemAdded) -> None:
        current_domain.repository_for(MenuPrice).add(
            MenuPrice(
                item_id=str(event.item_id),
                name_ar=event.name_ar,
                name_en=event.name_en,
                price=event.price,
                availability=event.availability,
                updated_at=event.added_at,
            )
        )
        logger.info("Menu price mirrored", item_id=str(event.item_id), price=event.price)

    @handle(MenuItemPriceChanged)
    def on_menu_item_price_changed(self, event: MenuItemPriceChanged) -> None:
        repo = current_domain.repository_for(MenuPrice)
        try:
            record = repo.get(str(event.item_id))
        except ObjectNotFoundError:
            logger.warning("Price change for unknown menu item", item_id=str(event.item_id))
            return

        record.price = event.new_price
        record.updated_at = event.changed_at
        repo.add(record)

    @handle(MenuItemAvailabilityChanged)
    def on_menu_item_availability_changed(self, event: MenuItemAvailabilityChanged) -> None:
        repo = current_domain.repository_for(MenuPrice)
        try:
            record = repo.get(str(event.item_id))
        except ObjectNotFoundError:
            logger.warning("Availability change for unknown menu item", item_id=str(event.item_id))
            return

        record.availability = event.new_availability
        record.updated_at = event.changed_at
        repo.add(record)
