"""Phone number normalization for customer lookup."""

import re

from protean.exceptions import ValidationError

_SEPARATORS = re.compile(r"[\s\-()]")
_PHONE = re.compile(r"^\+?\d{7,15}$")


def normalize_phone(raw) -> str:
    """Strip separators so the same phone always maps to the same customer.

    Accepts digits with an optional leading +; spaces, hyphens and parentheses
    are dropped.
    """
    number = _SEPARATORS.sub("", str(raw or ""))
    if not _PHONE.match(number):
        raise ValidationError({"phone": [f"Invalid phone number: {raw!r}"]})
    return number
