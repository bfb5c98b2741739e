"""Checkout configuration read from the environment."""
import os
from typing import Optional

from storefront.errors import ERROR_STRIPE_NOT_CONFIGURED
from storefront.logging import get_logger

logger = get_logger(__name__)

STRIPE_SECRET_KEY_ENV = "STRIPE_SECRET_KEY"
SITE_URL_ENV = "SITE_URL"


class CheckoutConfigError(Exception):
    """Raised when a required checkout setting is missing."""


def get_stripe_secret_key() -> str:
    """
    Get the Stripe secret key.

    Read on every call so a redeploy with new env vars needs no restart.

    Raises:
        CheckoutConfigError: If STRIPE_SECRET_KEY is not set
    """
    key = os.environ.get(STRIPE_SECRET_KEY_ENV, "").strip()
    if not key:
        logger.error(f"Stripe not configured. Missing: {STRIPE_SECRET_KEY_ENV}")
        raise CheckoutConfigError(ERROR_STRIPE_NOT_CONFIGURED)
    return key


def is_stripe_configured() -> bool:
    """Check if Stripe is configured without raising."""
    return bool(os.environ.get(STRIPE_SECRET_KEY_ENV, "").strip())


def get_site_url() -> Optional[str]:
    """Public site URL used when a request carries no Origin header."""
    value = os.environ.get(SITE_URL_ENV, "").strip()
    return value or None
