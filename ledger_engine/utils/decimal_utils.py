"""Helpers for Decimal normalization."""

from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON, or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percent_of(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return numerator / denominator * 100, or 0 for a non-positive base."""
    if denominator <= 0:
        return Decimal("0")
    return numerator / denominator * Decimal("100")


__all__ = ["coerce_decimal", "percent_of"]
