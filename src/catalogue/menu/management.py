"""Menu management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.menu.menu_item import MenuItem


@catalogue.command(part_of="MenuItem")
class AddMenuItem:
    item_id: Identifier(required=True)
    name_ar: String(required=True, max_length=200)
    name_en: String(max_length=200)
    description_ar: String(max_length=1000)
    category: String(max_length=20)
    price: String(required=True)  # Raw price; normalized by the aggregate
    previous_price: String()
    availability: String(max_length=30)


@catalogue.command(part_of="MenuItem")
class ChangeMenuItemPrice:
    item_id: Identifier(required=True)
    new_price: Float(required=True, min_value=0.0)


@catalogue.command(part_of="MenuItem")
class ChangeMenuItemAvailability:
    item_id: Identifier(required=True)
    availability: String(required=True, max_length=30)


@catalogue.command_handler(part_of=MenuItem)
class ManageMenuHandler:
    @handle(AddMenuItem)
    def add_menu_item(self, command):
        repo = current_domain.repository_for(MenuItem)
        existing = repo._dao.query.filter(item_id=command.item_id).all().items
        if existing:
            raise ValidationError({"item_id": [f"Menu item {command.item_id} already exists"]})

        item = MenuItem.create(
            item_id=command.item_id,
            name_ar=command.name_ar,
            name_en=command.name_en,
            description_ar=command.description_ar,
            category=command.category,
            price=command.price,
            previous_price=command.previous_price,
            availability=command.availability,
        )
        repo.add(item)
        return str(item.item_id)

    @handle(ChangeMenuItemPrice)
    def change_menu_item_price(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.item_id)
        item.change_price(command.new_price)
        repo.add(item)

    @handle(ChangeMenuItemAvailability)
    def change_menu_item_availability(self, command):
        repo = current_domain.repository_for(MenuItem)
        item = repo.get(command.item_id)
        item.change_availability(command.availability)
        repo.add(item)
