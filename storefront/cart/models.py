"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal

from storefront.catalog import Product
from storefront.services.money import price_or_zero, round_money, multiply


@dataclass(frozen=True)
class CartLine:
    """Single product line in the cart. Quantity is always >= 1."""
    product: Product
    quantity: int

    def __post_init__(self):
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool) or self.quantity < 1:
            raise ValueError("quantity must be a positive integer")

    @property
    def title(self) -> str:
        return self.product.title

    @property
    def unit_price(self) -> Decimal:
        """Parsed unit price; unparseable catalog prices count as 0."""
        return price_or_zero(self.product.price)

    @property
    def total_price(self) -> Decimal:
        """Total price for all units."""
        return round_money(multiply(self.unit_price, self.quantity))

    def to_dict(self) -> dict:
        """Persisted form. Product fields are copied so the cart survives catalog changes."""
        return {
            "title": self.product.title,
            "price": self.product.price,
            "image_url": self.product.image_url,
            "quantity": self.quantity,
        }

    def to_checkout_item(self) -> dict:
        """Shape expected by POST /api/create-checkout-session."""
        return {
            "title": self.product.title,
            "price": self.product.price,
            "quantity": self.quantity,
            "image_url": self.product.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """
        Create from the persisted form.

        Raises:
            KeyError, TypeError, ValueError: If the entry is incomplete or invalid
        """
        title = data["title"]
        price = data["price"]
        image_url = data["image_url"]
        if not isinstance(title, str) or not title:
            raise ValueError("title must be a non-empty string")
        if not isinstance(price, str) or not isinstance(image_url, str):
            raise TypeError("price and image_url must be strings")

        return cls(
            product=Product(title=title, price=price, image_url=image_url),
            quantity=data["quantity"],
        )
