"""
Checkout Session Service - Stripe hosted Checkout.

Stateless: every call validates one cart snapshot, prices it in cents and
creates exactly one Stripe Checkout Session. Nothing is retained between
requests.
"""
from typing import Any, Optional, Protocol

import stripe
from pydantic import ValidationError

from storefront.errors import ERROR_CHECKOUT_FAILED, ERROR_INVALID_ITEM, ERROR_NO_ITEMS
from storefront.logging import get_logger, loggable
from storefront.services.money import parse_price, to_cents
from .config import get_stripe_secret_key
from .constants import (
    ALLOWED_SHIPPING_COUNTRIES,
    CURRENCY,
    SUCCESS_PARAM,
    SUCCESS_VALUE,
    SessionMode,
)
from .models import CheckoutItem, CheckoutRequest

logger = get_logger(__name__)


class CheckoutError(Exception):
    """Checkout failure carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class CheckoutValidationError(CheckoutError):
    """The submitted cart snapshot is missing or malformed."""

    status_code = 400


class CheckoutUpstreamError(CheckoutError):
    """Stripe could not create the session. The cause is logged, not exposed."""

    status_code = 500


class CheckoutGateway(Protocol):
    async def create_session(
        self, api_key: str, params: dict[str, Any], idempotency_key: Optional[str] = None
    ) -> Optional[str]:
        ...


class StripeCheckoutGateway:
    """Creates hosted Checkout Sessions through the stripe SDK's async API."""

    async def create_session(
        self, api_key: str, params: dict[str, Any], idempotency_key: Optional[str] = None
    ) -> Optional[str]:
        options: dict[str, Any] = {"api_key": api_key}
        if idempotency_key:
            options["idempotency_key"] = idempotency_key
        session = await stripe.checkout.Session.create_async(**params, **options)
        return session.url


# ==================== PRICING ====================

def unit_amount_cents(price: str) -> int:
    """Per-unit price in cents, e.g. "$19.99" -> 1999."""
    amount = parse_price(price)
    if amount is None:
        raise ValueError(f"Unparseable price: {price!r}")
    return to_cents(amount)


def build_line_items(items: list[CheckoutItem]) -> list[dict[str, Any]]:
    """One Stripe line item per cart entry."""
    line_items = []
    for item in items:
        product_data: dict[str, Any] = {"name": item.title}
        if item.image_url:
            product_data["images"] = [item.image_url]

        line_items.append({
            "price_data": {
                "currency": CURRENCY,
                "product_data": product_data,
                "unit_amount": unit_amount_cents(item.price),
            },
            "quantity": item.quantity,
        })
    return line_items


def build_redirect_urls(origin: str) -> tuple[str, str]:
    """Success and cancel URLs for an origin like https://shop.example."""
    base = origin.rstrip("/")
    return f"{base}/?{SUCCESS_PARAM}={SUCCESS_VALUE}", f"{base}/"


def build_session_params(items: list[CheckoutItem], origin: str) -> dict[str, Any]:
    """Full parameter set for stripe.checkout.Session.create."""
    success_url, cancel_url = build_redirect_urls(origin)
    return {
        "mode": SessionMode.PAYMENT.value,
        "shipping_address_collection": {"allowed_countries": list(ALLOWED_SHIPPING_COUNTRIES)},
        "line_items": build_line_items(items),
        "success_url": success_url,
        "cancel_url": cancel_url,
    }


# ==================== VALIDATION ====================

def parse_checkout_items(body: Any) -> list[CheckoutItem]:
    """
    Validate a decoded request body.

    Raises:
        CheckoutValidationError: ERROR_NO_ITEMS if items is missing, not a
            list or empty; ERROR_INVALID_ITEM if any entry fails the schema
    """
    items = body.get("items") if isinstance(body, dict) else None
    if not isinstance(items, list) or not items:
        raise CheckoutValidationError(ERROR_NO_ITEMS)

    try:
        return CheckoutRequest.model_validate({"items": items}).items
    except ValidationError as e:
        logger.warning(f"Rejected checkout cart: {e.error_count()} invalid field(s)")
        raise CheckoutValidationError(ERROR_INVALID_ITEM) from e


# ==================== SERVICE ====================

class CheckoutSessionService:
    """Turns a cart snapshot into a Stripe-hosted checkout URL."""

    def __init__(self, gateway: Optional[CheckoutGateway] = None):
        self.gateway = gateway or StripeCheckoutGateway()

    async def create_session(
        self,
        body: Any,
        origin: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        """
        Create one checkout session and return its hosted URL.

        Checks run in order: credential, then items. Nothing reaches Stripe
        unless both pass.

        Raises:
            CheckoutConfigError: If STRIPE_SECRET_KEY is missing
            CheckoutValidationError: If the cart snapshot is invalid
            CheckoutUpstreamError: If Stripe fails or returns no URL
        """
        api_key = get_stripe_secret_key()
        items = parse_checkout_items(body)
        params = build_session_params(items, origin)

        try:
            url = await self.gateway.create_session(api_key, params, idempotency_key=idempotency_key)
            if not url:
                raise ValueError("Stripe session has no url")
        except Exception as e:
            logger.error(f"Stripe error: {e}", exc_info=True)
            raise CheckoutUpstreamError(ERROR_CHECKOUT_FAILED) from e

        logger.info(
            "Checkout session created: %d line item(s) for origin %s",
            len(items),
            loggable(origin),
        )
        return url
