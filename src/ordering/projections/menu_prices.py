"""Menu prices: Ordering's read-only copy of catalogue prices and availability."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.projection
class MenuPrice:
    item_id = Identifier(identifier=True, required=True)
    name_ar = String(required=True)
    name_en = String()
    price = Float(required=True)
    availability = String(required=True, default="available")
    updated_at = DateTime()


def display_name(record: MenuPrice) -> str:
    return record.name_ar or record.name_en or str(record.item_id)


def is_orderable(record: MenuPrice) -> bool:
    return record.availability == "available"
