"""
Product catalog.

The catalog is a static JSON list of {title, price, image_url, link} shipped
with the site. Titles are the product key, so duplicates are dropped on load
(first occurrence wins).
"""
import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterator, List, Optional

from storefront.logging import get_logger, loggable

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "products.json"

PRODUCT_FIELDS = ("title", "price", "image_url", "link")


@dataclass(frozen=True)
class Product:
    """Immutable catalog entry. `title` is unique within a catalog."""
    title: str
    price: str
    image_url: str
    link: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            title=data["title"],
            price=data["price"],
            image_url=data["image_url"],
            link=data.get("link", ""),
        )


class Catalog:
    """Ordered, title-unique product list."""

    def __init__(self, products: List[Product]):
        self._products: List[Product] = []
        self._by_title: dict[str, Product] = {}
        for product in products:
            if product.title in self._by_title:
                continue
            self._by_title[product.title] = product
            self._products.append(product)

    def find(self, title: str) -> Optional[Product]:
        return self._by_title.get(title)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def to_list(self) -> List[dict]:
        return [product.to_dict() for product in self._products]


def _is_valid_entry(entry) -> bool:
    if not isinstance(entry, dict):
        return False
    return all(isinstance(entry.get(field), str) and entry.get(field) for field in PRODUCT_FIELDS)


def parse_catalog(entries: list) -> Catalog:
    """Build a Catalog from decoded JSON, skipping incomplete entries."""
    products = []
    for entry in entries:
        if not _is_valid_entry(entry):
            title = entry.get("title") if isinstance(entry, dict) else None
            logger.warning(
                "Skipping incomplete catalog entry: %s",
                loggable(title),
            )
            continue
        products.append(Product.from_dict(entry))

    catalog = Catalog(products)
    if len(catalog) < len(products):
        logger.info("Dropped %d duplicate catalog titles", len(products) - len(catalog))
    return catalog


def get_catalog_path() -> Path:
    """Catalog location from CATALOG_PATH, defaulting to the bundled data file."""
    override = os.environ.get("CATALOG_PATH")
    return Path(override) if override else DEFAULT_CATALOG_PATH


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    Load and deduplicate the product catalog.

    Args:
        path: JSON file holding an array of products (default: CATALOG_PATH)

    Raises:
        FileNotFoundError: If the catalog file does not exist
        ValueError: If the file is not a JSON array
    """
    catalog_path = Path(path) if path else get_catalog_path()
    with catalog_path.open(encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"Catalog {catalog_path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Catalog {catalog_path} must contain a JSON array")

    return parse_catalog(data)
