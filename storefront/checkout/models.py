"""
Checkout API Pydantic Models

Request/response shapes for POST /api/create-checkout-session.
"""
from pydantic import BaseModel, Field, field_validator

from storefront.services.money import parse_price


class CheckoutItem(BaseModel):
    title: str = Field(min_length=1)
    price: str
    quantity: int = Field(ge=1, strict=True)
    image_url: str

    @field_validator("price")
    @classmethod
    def price_must_parse(cls, value: str) -> str:
        amount = parse_price(value)
        if amount is None or amount < 0:
            raise ValueError("price must look like $D.DD")
        return value


class CheckoutRequest(BaseModel):
    items: list[CheckoutItem] = Field(min_length=1)


class CheckoutResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str
