"""Payment allocation strategies, previews and balance snapshots.

Nothing here validates input or mutates a loan. Whether a payment may be
logged at all (positive amount, date inside the loan's life, custom split
adding up) is decided by the use case layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Union

from loan_ledger.domain.accrual import daily_interest
from loan_ledger.domain.entries import LedgerEntry, Payment
from loan_ledger.domain.loan import Loan


# Custom splits are typed in by a person and must add up exactly.
CUSTOM_SPLIT_TOLERANCE = Decimal("0")
# Imported splits went through 2-decimal rounding on export.
IMPORT_SPLIT_TOLERANCE = Decimal("0.01")


def split_matches(
    amount: Decimal,
    principal: Decimal,
    interest: Decimal,
    tolerance: Decimal = CUSTOM_SPLIT_TOLERANCE,
) -> bool:
    """
    True when ``principal + interest`` equals ``amount``.

    A zero tolerance means exact equality; otherwise the difference must be
    strictly less than the tolerance.
    """
    difference = abs(amount - (principal + interest))
    if tolerance == 0:
        return difference == 0
    return difference < tolerance


@dataclass(frozen=True, slots=True)
class InterestFirst:
    """Pay down accrued interest first, remainder to principal."""


@dataclass(frozen=True, slots=True)
class PrincipalOnly:
    """Apply the whole payment to principal."""


@dataclass(frozen=True, slots=True)
class Custom:
    """Caller-chosen split, used verbatim."""

    principal: Decimal
    interest: Decimal

    def matches(self, amount: Decimal, tolerance: Decimal = CUSTOM_SPLIT_TOLERANCE) -> bool:
        return split_matches(amount, self.principal, self.interest, tolerance)


PaymentStrategy = Union[InterestFirst, PrincipalOnly, Custom]


@dataclass(frozen=True, slots=True)
class PaymentSplit:
    principal: Decimal
    interest: Decimal


def split_payment(amount: Decimal, accrued: Decimal, strategy: PaymentStrategy) -> PaymentSplit:
    if isinstance(strategy, InterestFirst):
        if amount <= accrued:
            return PaymentSplit(principal=Decimal(0), interest=amount)
        return PaymentSplit(principal=amount - accrued, interest=accrued)

    if isinstance(strategy, PrincipalOnly):
        return PaymentSplit(principal=amount, interest=Decimal(0))

    if isinstance(strategy, Custom):
        return PaymentSplit(principal=strategy.principal, interest=strategy.interest)

    raise TypeError(f"Unknown payment strategy: {strategy!r}")


@dataclass(frozen=True, slots=True)
class Balances:
    principal: Decimal
    accrued_interest: Decimal
    total_owed: Decimal
    daily_interest: Decimal


def compute_balances(loan: Loan, as_of: datetime) -> Balances:
    principal = loan.current_principal()
    interest = loan.accrued_interest(as_of)
    return Balances(
        principal=principal,
        accrued_interest=interest,
        total_owed=principal + interest,
        daily_interest=loan.daily_interest_amount(),
    )


@dataclass(frozen=True, slots=True)
class PaymentImpact:
    """Before/after snapshot of a hypothetical payment."""

    payment_amount: Decimal
    applied_to_principal: Decimal
    applied_to_interest: Decimal

    principal_before: Decimal
    principal_after: Decimal

    interest_before: Decimal
    interest_after: Decimal

    total_before: Decimal
    total_after: Decimal

    daily_interest_before: Decimal
    daily_interest_after: Decimal

    @property
    def principal_change(self) -> Decimal:
        return self.principal_after - self.principal_before

    @property
    def interest_change(self) -> Decimal:
        return self.interest_after - self.interest_before

    @property
    def total_change(self) -> Decimal:
        return self.total_after - self.total_before

    @property
    def daily_interest_change(self) -> Decimal:
        return self.daily_interest_after - self.daily_interest_before


def preview_payment(
    loan: Loan,
    amount: Decimal,
    strategy: PaymentStrategy,
    date: datetime,
) -> PaymentImpact:
    """
    Compute what logging ``amount`` on ``date`` would do, without touching the ledger.

    "Before" interest is accrued as of ``date``; "before" principal and daily
    interest use the current ledger snapshot.
    """
    before = compute_balances(loan, date)
    split = split_payment(amount, before.accrued_interest, strategy)

    principal_after = before.principal - split.principal
    interest_after = before.accrued_interest - split.interest

    return PaymentImpact(
        payment_amount=amount,
        applied_to_principal=split.principal,
        applied_to_interest=split.interest,
        principal_before=before.principal,
        principal_after=principal_after,
        interest_before=before.accrued_interest,
        interest_after=interest_after,
        total_before=before.total_owed,
        total_after=principal_after + interest_after,
        daily_interest_before=before.daily_interest,
        daily_interest_after=daily_interest(principal_after, loan.annual_interest_rate),
    )


def build_payment_entry(
    loan: Loan,
    amount: Decimal,
    strategy: PaymentStrategy,
    date: datetime,
    notes: str = "",
) -> LedgerEntry:
    """The ledger entry committing this payment would append."""
    impact = preview_payment(loan, amount, strategy, date)
    return LedgerEntry(
        date=date,
        entry_type=Payment(
            to_principal=impact.applied_to_principal,
            to_interest=impact.applied_to_interest,
        ),
        notes=notes,
    )
