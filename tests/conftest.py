"""Pytest configuration and fixtures"""
import json
import pytest
from typing import Any, Dict, List, Optional

from storefront.cart import CART_STORAGE_KEY, CartStore, MemoryStorage
from storefront.catalog import Product


class StubGateway:
    """Records Stripe calls instead of making them."""

    def __init__(self, url: Optional[str] = "https://checkout.stripe.com/c/pay/cs_test_123", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create_session(self, api_key: str, params: Dict[str, Any], idempotency_key: Optional[str] = None):
        self.calls.append({"api_key": api_key, "params": params, "idempotency_key": idempotency_key})
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def skelly():
    return Product(
        title="12FT Skelly LED Eye Upgrade Kit",
        price="$12.50",
        image_url="https://cdn.example/skelly.jpg",
        link="https://shop.example/skelly",
    )


@pytest.fixture
def werewolf():
    return Product(
        title="9FT Werewolf Fog Breath Module",
        price="$7.00",
        image_url="https://cdn.example/werewolf.jpg",
        link="https://shop.example/werewolf",
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartStore(storage)


@pytest.fixture
def stored_cart():
    """Helper returning the decoded cart currently in storage."""
    def _read(storage: MemoryStorage):
        raw = storage.get(CART_STORAGE_KEY)
        return json.loads(raw) if raw else None
    return _read


@pytest.fixture
def sample_items():
    return [
        {"title": "Jack Skellington Jaw Servo Kit", "price": "$19.99", "quantity": 2, "image_url": "https://cdn.example/jack.jpg"},
        {"title": "Show Controller Sound Board", "price": "$12.50", "quantity": 1, "image_url": "https://cdn.example/board.jpg"},
    ]


@pytest.fixture
def make_gateway():
    return StubGateway


@pytest.fixture
def stub_gateway():
    return StubGateway()
