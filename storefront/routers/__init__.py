"""API routers."""
from .checkout import method_not_allowed_handler, router as checkout_router
from .products import router as products_router

__all__ = ["checkout_router", "method_not_allowed_handler", "products_router"]
