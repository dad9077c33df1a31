"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from storage, forms or adapters.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        InvalidOperation: If the value cannot be read as a number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"Boolean is not an amount: {value!r}")
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    return Decimal(str(value))


def try_coerce_decimal(value) -> Decimal | None:
    """Return value as a finite Decimal, or None when it is not a number."""
    try:
        result = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not result.is_finite():
        return None
    return result


__all__ = ["coerce_decimal", "try_coerce_decimal"]
