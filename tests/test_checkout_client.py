"""Tests for the checkout HTTP client and session facade"""
import asyncio
import json

import httpx
import pytest

from storefront.client import (
    CheckoutBusyError,
    CheckoutClient,
    CheckoutRequestError,
    CheckoutTimeoutError,
    StorefrontSession,
    ViewState,
)

BASE_URL = "https://shop.example"
CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_123"


def _client(handler, timeout: float = 5.0) -> CheckoutClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CheckoutClient(BASE_URL, timeout=timeout, http_client=http_client)


@pytest.mark.asyncio
async def test_create_session_posts_snapshot(sample_items):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    client = _client(handler)
    url = await client.create_session(sample_items)

    assert url == CHECKOUT_URL
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://shop.example/api/create-checkout-session"
    assert json.loads(seen[0].content) == {"items": sample_items}
    assert seen[0].headers["Idempotency-Key"]
    assert client.busy is False


@pytest.mark.asyncio
async def test_each_attempt_gets_new_idempotency_key(sample_items):
    keys = []

    def handler(request: httpx.Request) -> httpx.Response:
        keys.append(request.headers["Idempotency-Key"])
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    client = _client(handler)
    await client.create_session(sample_items)
    await client.create_session(sample_items)

    assert len(set(keys)) == 2


@pytest.mark.asyncio
async def test_duplicate_submission_rejected_while_busy(sample_items):
    release = asyncio.Event()
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        await release.wait()
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    client = _client(handler)
    first = asyncio.create_task(client.create_session(sample_items))
    await asyncio.sleep(0.01)

    assert client.busy is True
    with pytest.raises(CheckoutBusyError):
        await client.create_session(sample_items)

    release.set()
    assert await first == CHECKOUT_URL
    assert len(calls) == 1
    assert client.busy is False


@pytest.mark.asyncio
async def test_timeout_clears_busy_flag(sample_items):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    client = _client(handler, timeout=0.05)

    with pytest.raises(CheckoutTimeoutError):
        await client.create_session(sample_items)
    assert client.busy is False


@pytest.mark.asyncio
async def test_server_error_message_is_surfaced(sample_items):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "No items provided"})

    client = _client(handler)

    with pytest.raises(CheckoutRequestError) as exc:
        await client.create_session(sample_items)
    assert exc.value.status_code == 400
    assert exc.value.message == "No items provided"
    assert client.busy is False


@pytest.mark.asyncio
async def test_empty_error_body(sample_items):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(405, headers={"Allow": "POST"})

    with pytest.raises(CheckoutRequestError) as exc:
        await _client(handler).create_session(sample_items)
    assert exc.value.message == "HTTP 405"


@pytest.mark.asyncio
async def test_network_failure(sample_items):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(CheckoutRequestError):
        await client.create_session(sample_items)
    assert client.busy is False


@pytest.mark.asyncio
async def test_empty_cart_sends_nothing():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    with pytest.raises(CheckoutRequestError):
        await _client(handler).create_session([])
    assert calls == []


@pytest.mark.asyncio
async def test_place_order_uses_cart_snapshot(cart, skelly):
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"url": CHECKOUT_URL})

    cart.add(skelly)
    cart.add(skelly)
    session = StorefrontSession(cart, _client(handler))

    assert await session.place_order() == CHECKOUT_URL
    assert bodies[0]["items"] == [{
        "title": skelly.title,
        "price": "$12.50",
        "quantity": 2,
        "image_url": skelly.image_url,
    }]
    # Cart is only cleared by the success redirect
    assert cart.count() == 2


def test_page_load_with_success_marker_clears_cart(cart, storage, stored_cart, skelly):
    cart.add(skelly)
    session = StorefrontSession(cart, CheckoutClient(BASE_URL))

    result = session.on_page_load("https://shop.example/?success=true")

    assert result.confirmed
    assert result.url == "https://shop.example/"
    assert session.view is ViewState.ORDER_CONFIRMED
    assert cart.snapshot() == ()
    assert stored_cart(storage) == []


def test_page_load_without_marker_keeps_cart(cart, skelly):
    cart.add(skelly)
    session = StorefrontSession(cart, CheckoutClient(BASE_URL))

    result = session.on_page_load("https://shop.example/")

    assert not result.confirmed
    assert session.view is ViewState.BROWSING
    assert cart.count() == 1
