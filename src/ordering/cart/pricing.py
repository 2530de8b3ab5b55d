"""Cart pricing against the mirrored menu.

Amounts are computed in ``Decimal``. A line whose item has no known price
contributes zero rather than failing the whole cart.
"""

from decimal import Decimal

import structlog

from shared.money import ZERO, PriceFormatError, to_decimal

logger = structlog.get_logger(__name__)


def unit_price_for(item_id, price_list) -> Decimal | None:
    """Return the normalized price for an item, or None when it cannot be resolved."""
    raw = price_list.get(str(item_id))
    if raw is None:
        return None
    try:
        return to_decimal(raw)
    except PriceFormatError:
        logger.warning("Unreadable menu price", item_id=str(item_id), raw_price=repr(raw))
        return None


def price_lines(lines, price_list) -> Decimal:
    """Sum ``unit_price * quantity`` over lines exposing ``item_id`` and ``quantity``."""
    subtotal = ZERO
    for line in lines:
        unit_price = unit_price_for(line.item_id, price_list)
        if unit_price is None:
            continue
        subtotal += unit_price * line.quantity
    return subtotal


def current_price_list(item_ids=None) -> dict:
    """Build an ``item_id -> price`` map from the MenuPrice projection."""
    from protean.utils.globals import current_domain

    from ordering.projections.menu_prices import MenuPrice

    query = current_domain.repository_for(MenuPrice)._dao.query
    if item_ids is not None:
        wanted = sorted({str(item_id) for item_id in item_ids})
        if not wanted:
            return {}
        query = query.filter(item_id__in=wanted)
    # The default query page stops at 100 rows
    records = query.limit(None).all().items
    return {str(record.item_id): record.price for record in records}
