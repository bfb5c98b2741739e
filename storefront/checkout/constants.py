"""Checkout constants and enums."""
from enum import Enum


class SessionMode(str, Enum):
    """Stripe Checkout session modes used by the storefront."""
    PAYMENT = "payment"


# Single supported currency (ISO code, lowercase as Stripe expects)
CURRENCY = "usd"

# Shipping address collection is limited to these countries
ALLOWED_SHIPPING_COUNTRIES: list[str] = ["US"]

# Query parameter appended to the success URL
SUCCESS_PARAM = "success"
SUCCESS_VALUE = "true"

# Request header carrying the client's per-attempt idempotency token
IDEMPOTENCY_HEADER = "Idempotency-Key"

CHECKOUT_PATH = "/api/create-checkout-session"
