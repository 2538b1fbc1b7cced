"""Helpers for monetary amounts shown in notification text."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

_CENTS = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_usd(value: Number) -> str:
    """Format an amount as dollars with two decimals, e.g. "$1234.50".

    No thousands separator is used, matching the notification copy.
    """
    amount = to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"${amount}"


def format_plain(value: Number) -> str:
    """Format an amount for structured payloads (no currency symbol)."""
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal("1")))
    return format(amount.normalize(), "f")
