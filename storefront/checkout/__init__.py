"""Checkout module: Stripe session creation for cart snapshots."""
from .config import CheckoutConfigError, get_stripe_secret_key, is_stripe_configured
from .constants import CURRENCY, ALLOWED_SHIPPING_COUNTRIES, SUCCESS_PARAM, SessionMode
from .service import (
    CheckoutError,
    CheckoutSessionService,
    CheckoutUpstreamError,
    CheckoutValidationError,
    StripeCheckoutGateway,
    build_line_items,
    build_session_params,
)

__all__ = [
    "ALLOWED_SHIPPING_COUNTRIES",
    "CURRENCY",
    "CheckoutConfigError",
    "CheckoutError",
    "CheckoutSessionService",
    "CheckoutUpstreamError",
    "CheckoutValidationError",
    "SUCCESS_PARAM",
    "SessionMode",
    "StripeCheckoutGateway",
    "build_line_items",
    "build_session_params",
    "get_stripe_secret_key",
    "is_stripe_configured",
]
