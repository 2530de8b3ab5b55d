"""Ordering domain API package."""

from ordering.api.routes import cart_router, feed_router, order_router

__all__ = ["cart_router", "order_router", "feed_router"]
