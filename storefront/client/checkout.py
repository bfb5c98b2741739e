"""
Checkout Client - calls POST /api/create-checkout-session.

One request at a time: a busy flag rejects a second submission while the
first is in flight, and an explicit timeout clears the flag if the server
never answers. Every attempt carries a fresh idempotency key.
"""
import asyncio
import uuid
from typing import Any, Optional

import httpx

from storefront.checkout.constants import CHECKOUT_PATH, IDEMPOTENCY_HEADER
from storefront.errors import ERROR_CHECKOUT_BUSY, ERROR_CHECKOUT_TIMEOUT, ERROR_EMPTY_CART
from storefront.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 15.0


class CheckoutClientError(Exception):
    """Base class for client-side checkout failures."""


class CheckoutBusyError(CheckoutClientError):
    """A checkout request is already outstanding."""


class CheckoutTimeoutError(CheckoutClientError):
    """The checkout request did not finish within the timeout."""


class CheckoutRequestError(CheckoutClientError):
    """The server rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CheckoutClient:
    """Async client for the storefront checkout endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                limits=httpx.Limits(max_connections=5, max_keepalive_connections=2),
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def create_session(self, items: list[dict[str, Any]]) -> str:
        """
        Submit a cart snapshot and return the hosted checkout URL.

        Args:
            items: [{title, price, quantity, image_url}, ...]

        Raises:
            CheckoutBusyError: If another checkout is in flight
            CheckoutTimeoutError: If the server does not answer in time
            CheckoutRequestError: If the cart is empty, the server answers
                non-2xx, or the network fails
        """
        if self._busy:
            logger.info("Ignoring duplicate checkout submission")
            raise CheckoutBusyError(ERROR_CHECKOUT_BUSY)
        if not items:
            raise CheckoutRequestError(ERROR_EMPTY_CART)

        self._busy = True
        try:
            client = await self._get_http_client()
            response = await asyncio.wait_for(
                client.post(
                    f"{self.base_url}{CHECKOUT_PATH}",
                    json={"items": items},
                    headers={IDEMPOTENCY_HEADER: str(uuid.uuid4())},
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Checkout request timed out after {self.timeout}s")
            raise CheckoutTimeoutError(ERROR_CHECKOUT_TIMEOUT) from e
        except httpx.HTTPError as e:
            logger.error(f"Checkout request failed: {e}")
            raise CheckoutRequestError(f"Checkout request failed: {e}") from e
        finally:
            self._busy = False

        return self._parse_response(response)

    @staticmethod
    def _parse_response(response: httpx.Response) -> str:
        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = None

        if response.is_success:
            url = data.get("url") if isinstance(data, dict) else None
            if not url:
                raise CheckoutRequestError("Checkout response has no url", response.status_code)
            return url

        message = data.get("error") if isinstance(data, dict) else None
        raise CheckoutRequestError(message or f"HTTP {response.status_code}", response.status_code)
