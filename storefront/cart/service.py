"""Client-side cart store with synchronous persistence."""
import json
from decimal import Decimal
from typing import List, Optional, Tuple

from storefront.catalog import Product
from storefront.logging import get_logger, loggable
from storefront.services.money import format_money, round_money
from .models import CartLine
from .storage import CartStorage, CART_STORAGE_KEY

logger = get_logger(__name__)


class CartStore:
    """
    Owns the visitor's cart for one client session.

    Features:
    - One line per product title, kept in first-added order
    - Lines reaching quantity 0 are dropped
    - Full cart written to storage after every mutation
    - Corrupt stored carts are discarded in favor of an empty cart
    """

    def __init__(self, storage: CartStorage, key: str = CART_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._lines: List[CartLine] = self._load()

    # ==================== PERSISTENCE ====================

    def _load(self) -> List[CartLine]:
        """Rehydrate from storage, falling back to an empty cart."""
        try:
            raw = self._storage.get(self._key)
        except Exception as e:
            logger.warning(f"Failed to read stored cart: {e}")
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError("stored cart is not a list")
            lines = [CartLine.from_dict(entry) for entry in data]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Corrupted stored cart, starting empty: {e}")
            return []

        return self._merge_duplicates(lines)

    @staticmethod
    def _merge_duplicates(lines: List[CartLine]) -> List[CartLine]:
        merged: dict[str, CartLine] = {}
        for line in lines:
            existing = merged.get(line.title)
            if existing is None:
                merged[line.title] = line
            else:
                merged[line.title] = CartLine(existing.product, existing.quantity + line.quantity)
        return list(merged.values())

    def _save(self) -> None:
        """Write the full cart. Storage failures are logged, never raised."""
        payload = json.dumps([line.to_dict() for line in self._lines])
        try:
            self._storage.set(self._key, payload)
        except Exception as e:
            logger.error(f"Failed to persist cart: {e}", exc_info=True)

    def _index_of(self, title: str) -> Optional[int]:
        for i, line in enumerate(self._lines):
            if line.title == title:
                return i
        return None

    # ==================== MUTATIONS ====================

    def add(self, product: Product) -> None:
        """Add one unit of product, merging with an existing line of the same title."""
        index = self._index_of(product.title)
        if index is None:
            self._lines.append(CartLine(product=product, quantity=1))
        else:
            line = self._lines[index]
            self._lines[index] = CartLine(product=line.product, quantity=line.quantity + 1)
        self._save()

    def remove(self, title: str) -> None:
        """Remove the line for title. Missing titles are ignored."""
        index = self._index_of(title)
        if index is None:
            return
        del self._lines[index]
        self._save()

    def change_quantity(self, title: str, delta: int) -> None:
        """Adjust quantity by a signed delta; lines at or below zero are removed."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise TypeError("delta must be an integer")

        index = self._index_of(title)
        if index is None:
            logger.debug("change_quantity for unknown title %s", loggable(title))
            return

        line = self._lines[index]
        new_quantity = line.quantity + delta
        if new_quantity <= 0:
            del self._lines[index]
        else:
            self._lines[index] = CartLine(product=line.product, quantity=new_quantity)
        self._save()

    def clear(self) -> None:
        """Empty the cart."""
        self._lines = []
        self._save()

    # ==================== QUERIES ====================

    def snapshot(self) -> Tuple[CartLine, ...]:
        """Current lines in insertion order."""
        return tuple(self._lines)

    def total(self) -> Decimal:
        """Sum of price x quantity, rounded to cents."""
        return round_money(sum((line.total_price for line in self._lines), Decimal("0")))

    def total_display(self) -> str:
        """Total as a storefront price string, e.g. "$32.00"."""
        return format_money(self.total())

    def count(self) -> int:
        """Total number of units in the cart."""
        return sum(line.quantity for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def to_checkout_items(self) -> List[dict]:
        """Snapshot in the checkout request shape."""
        return [line.to_checkout_item() for line in self._lines]
