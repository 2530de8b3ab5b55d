"""Price normalization at the catalogue boundary.

Menu prices arrive in several shapes: plain numbers, numeric strings
(``"4.00"``) and the extended-JSON decimal wrapper ``{"$numberDecimal": "4.00"}``.
Everything past the boundary works with ``Decimal`` amounts quantized to
two places.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

CURRENCY = "SAR"


class PriceFormatError(ValueError):
    """Raised when a price value cannot be read as a non-negative amount."""


def to_decimal(raw) -> Decimal:
    """Normalize a raw price into a two-place ``Decimal``.

    Raises ``PriceFormatError`` for booleans, ``None``, non-numeric strings,
    non-finite values and negative amounts.
    """
    value = raw
    if isinstance(value, dict):
        if "$numberDecimal" not in value:
            raise PriceFormatError(f"Unsupported price object: {raw!r}")
        value = value["$numberDecimal"]

    if isinstance(value, bool) or value is None:
        raise PriceFormatError(f"Not a price: {raw!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int | float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation as exc:
            raise PriceFormatError(f"Not a price: {raw!r}") from exc
    else:
        raise PriceFormatError(f"Not a price: {raw!r}")

    if not amount.is_finite():
        raise PriceFormatError(f"Not a finite price: {raw!r}")
    if amount < 0:
        raise PriceFormatError(f"Negative price: {raw!r}")

    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def discount_percentage(price, previous_price) -> int:
    """Whole-number discount shown next to a struck-through previous price."""
    if previous_price is None:
        return 0
    current = to_decimal(price)
    previous = to_decimal(previous_price)
    if previous <= current or previous == 0:
        return 0
    return int(((previous - current) / previous * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
