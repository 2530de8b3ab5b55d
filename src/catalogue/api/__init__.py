"""Catalogue domain API package."""

from catalogue.api.routes import menu_router

__all__ = ["menu_router"]
