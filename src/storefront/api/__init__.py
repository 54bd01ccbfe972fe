"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import cart_router, customer_router, order_router, product_router

routers = [customer_router, product_router, cart_router, order_router]

__all__ = [
    "cart_router",
    "customer_router",
    "order_router",
    "product_router",
    "register_error_handlers",
    "routers",
]
