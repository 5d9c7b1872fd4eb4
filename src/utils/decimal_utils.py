"""Helpers for Decimal normalization and storage."""

from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQLite, environment or user input.

    Returns:
        Decimal: Normalized numeric value, 0 when missing.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def decimal_to_text(value: Decimal) -> str:
    """Serialize a Decimal for TEXT columns without losing precision."""
    return format(coerce_decimal(value), "f")


__all__ = ["coerce_decimal", "decimal_to_text"]
