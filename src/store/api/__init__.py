"""Store domain API package."""

from store.api.routes import (
    product_router,
    purchase_router,
    register_checkout_error_handlers,
    shopper_router,
)

__all__ = ["shopper_router", "product_router", "purchase_router", "register_checkout_error_handlers"]
