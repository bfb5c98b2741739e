"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Catalog prices
arrive as display strings ("$12.50"); parse_price is the single place they
become numbers.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Optional prefix on catalog prices
CURRENCY_SYMBOL = "$"

Number = Union[str, int, float, Decimal, None]


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")

    # "nan" and "inf" parse fine but are never prices
    return result if result.is_finite() else Decimal("0")


def parse_price(price: str | None) -> Decimal | None:
    """
    Parse a display price such as "$19.99".

    Strips surrounding whitespace and at most one leading "$", then parses
    the remainder as a plain decimal number. Digit separators ("1_000",
    "1,000") are rejected.

    Returns:
        Decimal amount, or None if the string is not a finite number
    """
    if not isinstance(price, str):
        return None

    text = price.strip().removeprefix(CURRENCY_SYMBOL).strip()
    if not text or "_" in text:
        return None

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None
    return amount


def price_or_zero(price: str | None) -> Decimal:
    """Parse a display price, counting unparseable prices as 0."""
    amount = parse_price(price)
    return amount if amount is not None else Decimal("0")


def to_cents(value: Number) -> int:
    """
    Convert decimal amount to minor units (cents).

    Used for payment APIs that expect integer minor units.

    Args:
        value: Amount in major units (e.g., 19.99 USD)

    Returns:
        Amount in minor units (e.g., 1999 cents)
    """
    decimal_value = to_decimal(value)
    return int((decimal_value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number) -> str:
    """
    Format monetary value the way the catalog writes prices.

    Args:
        value: Value to format

    Returns:
        String like "$1,032.00"
    """
    return f"${round_money(value):,.2f}"


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
