"""
Storefront Core Module

This package contains the cart-and-checkout components:
- cart: client-side cart store with pluggable persistence
- checkout: Stripe checkout-session creation
- catalog: static product list loading
- client: checkout HTTP client and success-redirect handling
- routers: FastAPI routers

Note: Imports are lazy to keep serverless cold starts small.
"""

__all__ = [
    "CartStore",
    "CheckoutSessionService",
    "load_catalog",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "CheckoutSessionService":
        from storefront.checkout import CheckoutSessionService
        return CheckoutSessionService
    elif name == "load_catalog":
        from storefront.catalog import load_catalog
        return load_catalog
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
