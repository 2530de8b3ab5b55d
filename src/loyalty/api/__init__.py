"""Loyalty domain API package."""

from loyalty.api.routes import card_router, customer_router

__all__ = ["customer_router", "card_router"]
