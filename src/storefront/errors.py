"""Storefront error hierarchy.

Validation problems are raised before any request is sent. Server refusals
and network failures are raised by the API client.
"""


class StorefrontError(Exception):
    """Base class for every storefront failure."""


class InvalidQuantity(StorefrontError, ValueError):
    """A cart quantity was not a whole number in the accepted range."""


class InvalidDelivery(StorefrontError, ValueError):
    """A delivery descriptor does not satisfy its mode's requirements."""


class MissingFulfillment(StorefrontError):
    """Checkout was attempted before choosing pickup, delivery or dine-in."""


class EmptyCart(StorefrontError):
    """Checkout was attempted with nothing in the cart."""


class NotRegistered(StorefrontError):
    """A loyalty action was attempted in guest mode."""


class ApiError(StorefrontError):
    """The server refused a request."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ServiceUnavailable(StorefrontError):
    """The server could not be reached or failed internally."""


class NoFreeDrinks(StorefrontError):
    """A free drink was requested but the loyalty card has none left."""
