"""
Key-value persistence for the cart.

The cart store only needs `get(key)` and `set(key, value)`. Adapters:
- MemoryStorage: in-process dict (tests, scripts)
- JsonFileStorage: a JSON document on disk, the local-storage equivalent
- RedisStorage: Upstash Redis, for carts that must outlive the process
"""
import json
import os
from pathlib import Path
from typing import Optional, Protocol

from storefront.logging import get_logger

logger = get_logger(__name__)

# Fixed key the serialized cart lives under
CART_STORAGE_KEY = "storefront_cart"


class CartStorage(Protocol):
    """Storage port used by CartStore."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    All keys stored in one JSON object on disk.

    A missing or unreadable file reads as empty; writes replace the file
    atomically so a crash never leaves half a cart behind.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict:
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp_path, self.path)


class RedisKeys:
    """Redis key prefixes for cart data."""

    CART = "cart:"  # cart:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"


class TTL:
    """TTL values in seconds."""

    CART = 7 * 24 * 60 * 60  # abandoned carts expire after a week


class RedisStorage:
    """
    Upstash Redis storage, one namespace per visitor session.

    Pass a client for tests; otherwise one is created from
    UPSTASH_REDIS_REST_URL / UPSTASH_REDIS_REST_TOKEN.
    """

    def __init__(self, session_id: str, client=None, ttl: Optional[int] = TTL.CART):
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        self.session_id = session_id
        self.ttl = ttl
        self._redis = client

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def _key(self, key: str) -> str:
        return f"{RedisKeys.cart_key(self.session_id)}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self.redis.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        if self.ttl:
            self.redis.set(self._key(key), value, ex=self.ttl)
        else:
            self.redis.set(self._key(key), value)


_sync_redis_client = None


def get_redis_sync():
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        from upstash_redis import Redis

        url = os.environ.get("UPSTASH_REDIS_REST_URL", "")
        token = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
        if not url or not token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=url, token=token)

    return _sync_redis_client
