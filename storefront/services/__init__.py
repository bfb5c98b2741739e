# Services Module
from .money import format_money, parse_price, round_money, to_cents

__all__ = ["format_money", "parse_price", "round_money", "to_cents"]
