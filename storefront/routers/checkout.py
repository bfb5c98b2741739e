"""
Checkout Router

POST /api/create-checkout-session turns a cart snapshot into a Stripe-hosted
checkout URL. Every other method gets 405 with `Allow: POST` and no body.
"""
import json

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.checkout import CheckoutConfigError, CheckoutError, CheckoutSessionService
from storefront.checkout.config import get_site_url
from storefront.checkout.constants import CHECKOUT_PATH, IDEMPOTENCY_HEADER
from storefront.checkout.models import CheckoutResponse, ErrorResponse
from storefront.logging import get_logger
from .deps import get_checkout_service

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


def _request_origin(request: Request) -> str:
    """Origin header, then SITE_URL, then the URL the request arrived on."""
    origin = request.headers.get("origin")
    if origin and origin != "null":
        return origin
    return get_site_url() or str(request.base_url)


async def _read_body(request: Request):
    """Decoded JSON body, or None when the body is empty or not JSON."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    CHECKOUT_PATH,
    response_model=CheckoutResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_checkout_session(
    request: Request,
    service: CheckoutSessionService = Depends(get_checkout_service),
):
    """Create a Stripe Checkout Session for the submitted cart."""
    body = await _read_body(request)

    try:
        url = await service.create_session(
            body,
            origin=_request_origin(request),
            idempotency_key=request.headers.get(IDEMPOTENCY_HEADER),
        )
    except CheckoutConfigError as e:
        return JSONResponse({"error": str(e)}, status_code=500)
    except CheckoutError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return CheckoutResponse(url=url)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """
    405 for any non-POST verb on the checkout path: `Allow: POST`, empty body.

    Other HTTP errors keep FastAPI's default JSON rendering.
    """
    if exc.status_code == 405 and request.url.path == CHECKOUT_PATH:
        return Response(status_code=405, headers={"Allow": "POST"})
    return await http_exception_handler(request, exc)
