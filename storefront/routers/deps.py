"""
Shared Dependencies for Routers

Lazy-loaded singletons to optimize cold start.
Import heavy modules only when needed.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.catalog import Catalog
    from storefront.checkout import CheckoutSessionService


_checkout_service: Optional["CheckoutSessionService"] = None
_catalog: Optional["Catalog"] = None


def get_checkout_service() -> "CheckoutSessionService":
    """Get or create CheckoutSessionService singleton (lazy loaded)"""
    global _checkout_service
    if _checkout_service is None:
        from storefront.checkout import CheckoutSessionService
        _checkout_service = CheckoutSessionService()
    return _checkout_service


def get_catalog() -> "Catalog":
    """Get or load the product catalog (lazy loaded)"""
    global _catalog
    if _catalog is None:
        from storefront.catalog import load_catalog
        _catalog = load_catalog()
    return _catalog
