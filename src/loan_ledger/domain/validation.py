"""Rules for what callers may write to a ledger.

The accrual and allocation functions accept any structurally valid ledger.
These checks run before a change is applied, in the use case layer.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from loan_ledger.domain.errors import FieldError, ValidationError, field_error
from loan_ledger.domain.payments import Custom, PaymentStrategy

MIN_ANNUAL_RATE = Decimal("0")
MAX_ANNUAL_RATE = Decimal("1")


class InvalidLedgerInput(ValidationError):
    """Raised when a requested change may not be applied to a loan."""


def require_decimal(field: str, value: object) -> list[FieldError]:
    # Guardrail: no floats past the boundary
    if not isinstance(value, Decimal):
        return [field_error(field, "Must be a Decimal", "INVALID_TYPE")]
    if not value.is_finite():
        return [field_error(field, "Must be a finite number", "INVALID_VALUE")]
    return []


def check_positive_amount(field: str, amount: Decimal) -> list[FieldError]:
    errors = require_decimal(field, amount)
    if errors:
        return errors
    if amount <= 0:
        return [field_error(field, "Amount must be greater than zero", "INVALID_VALUE")]
    return []


def check_entry_date(
    entry_date: datetime,
    start_date: datetime,
    now: datetime,
    label: str = "Entry",
) -> list[FieldError]:
    if entry_date < start_date:
        return [
            field_error(
                "date",
                f"{label} date cannot be before loan start date ({start_date.date().isoformat()})",
                "DATE_BEFORE_START",
            )
        ]
    if entry_date > now:
        return [field_error("date", f"{label} date cannot be in the future", "DATE_IN_FUTURE")]
    return []


def check_split_parts(principal: Decimal, interest: Decimal) -> list[FieldError]:
    errors = require_decimal("principal", principal) + require_decimal("interest", interest)
    if errors:
        return errors
    if principal < 0 or interest < 0:
        return [field_error("split", "Amounts cannot be negative", "NEGATIVE_AMOUNT")]
    return []


def check_strategy(amount: Decimal, strategy: PaymentStrategy) -> list[FieldError]:
    if not isinstance(strategy, Custom):
        return []
    errors = check_split_parts(strategy.principal, strategy.interest)
    if errors:
        return errors
    if not strategy.matches(amount):
        return [
            field_error(
                "split",
                "Principal + Interest must equal total payment amount",
                "SPLIT_MISMATCH",
            )
        ]
    return []


def check_borrower_name(borrower_name: str) -> list[FieldError]:
    if not borrower_name.strip():
        return [field_error("borrower_name", "Borrower name is required", "REQUIRED")]
    return []


def check_annual_rate(rate: Decimal) -> list[FieldError]:
    errors = require_decimal("annual_interest_rate", rate)
    if errors:
        return errors
    if rate < MIN_ANNUAL_RATE:
        return [field_error("annual_interest_rate", "Interest rate cannot be negative", "INVALID_VALUE")]
    if rate > MAX_ANNUAL_RATE:
        return [field_error("annual_interest_rate", "Interest rate cannot exceed 100%", "INVALID_VALUE")]
    return []


def raise_if_errors(errors: list[FieldError]) -> None:
    if errors:
        raise InvalidLedgerInput(errors=errors)
