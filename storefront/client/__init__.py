"""Client-side checkout flow: HTTP client, redirect handling, session facade."""
from .checkout import (
    CheckoutBusyError,
    CheckoutClient,
    CheckoutClientError,
    CheckoutRequestError,
    CheckoutTimeoutError,
)
from .redirect import RedirectResult, ViewState, inspect_landing_url, strip_success_marker
from .session import StorefrontSession

__all__ = [
    "CheckoutBusyError",
    "CheckoutClient",
    "CheckoutClientError",
    "CheckoutRequestError",
    "CheckoutTimeoutError",
    "RedirectResult",
    "StorefrontSession",
    "ViewState",
    "inspect_landing_url",
    "strip_success_marker",
]
