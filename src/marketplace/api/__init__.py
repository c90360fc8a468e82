"""Marketplace API package."""

from marketplace.api.errors import register_error_handlers
from marketplace.api.routes import admin_router, cart_router, order_router, product_router

__all__ = ["admin_router", "cart_router", "order_router", "product_router", "register_error_handlers"]
