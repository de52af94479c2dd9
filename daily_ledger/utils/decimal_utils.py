"""Helpers for Decimal normalization and money rounding."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    """Quantize a value to cents, rounding half away from zero.

    Args:
        value: Raw numeric value (Decimal, int, str or float).

    Returns:
        Decimal: Value with exactly two fractional digits.
    """
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def add_money(total: Decimal, amount) -> Decimal:
    """Add an amount to a running total and round the partial sum."""
    return round_money(total + coerce_decimal(amount))


def parse_money(value) -> Decimal | None:
    """Parse a user supplied amount into a rounded Decimal.

    Returns:
        Decimal | None: Rounded amount, or None when the value is not a
        finite number.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = coerce_decimal(value)
        if not parsed.is_finite():
            return None
        return round_money(parsed)
    except InvalidOperation:
        return None


__all__ = [
    "CENT",
    "ZERO",
    "coerce_decimal",
    "round_money",
    "add_money",
    "parse_money",
]
