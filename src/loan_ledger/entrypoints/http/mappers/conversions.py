"""String/Decimal/datetime conversions at the HTTP boundary."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from loan_ledger.domain.errors import FieldError, field_error

CENT = Decimal("0.01")


def parse_decimal(field: str, value: str, errors: list[FieldError]) -> Decimal:
    """
    Convert a decimal string, collecting an error instead of raising.

    Returns a zero placeholder on failure so callers can keep validating
    other fields.
    """
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError):
        errors.append(field_error(field, f"Must be a valid decimal: {value}", "INVALID_DECIMAL"))
        return Decimal("0")


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def money(value: Decimal) -> str:
    """Round to cents for display. Calculations keep full precision."""
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))
