"""Cart package: models, storage adapters, and the cart store."""
from .models import CartLine
from .service import CartStore
from .storage import (
    CART_STORAGE_KEY,
    CartStorage,
    JsonFileStorage,
    MemoryStorage,
    RedisStorage,
)

__all__ = [
    "CART_STORAGE_KEY",
    "CartLine",
    "CartStorage",
    "CartStore",
    "JsonFileStorage",
    "MemoryStorage",
    "RedisStorage",
]
