"""Interest accrual engine.

Accrued interest is simple daily proration of the annual rate over the
running principal. Interest never joins the principal and never earns
interest itself; it lives in its own accumulator that only payments
allocated to interest reduce.

Every query replays the ledger from the loan start date. Entries can be
inserted, edited or deleted out of chronological order at any time, so no
running balance is kept between calls.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry

if TYPE_CHECKING:
    from loan_ledger.domain.loan import Loan


DAYS_PER_YEAR = Decimal(365)
SECONDS_PER_DAY = Decimal(86400)
ZERO = Decimal(0)


def elapsed_days(start: datetime, end: datetime) -> Decimal:
    """Exact fractional days from ``start`` to ``end`` (negative if end is earlier)."""
    delta: timedelta = end - start
    seconds = Decimal(delta.days) * SECONDS_PER_DAY + Decimal(delta.seconds)
    seconds += Decimal(delta.microseconds) / Decimal(1_000_000)
    return seconds / SECONDS_PER_DAY


def daily_interest(principal: Decimal, annual_rate: Decimal) -> Decimal:
    return principal * annual_rate / DAYS_PER_YEAR


def interest_for_period(principal: Decimal, annual_rate: Decimal, days: Decimal) -> Decimal:
    # principal * rate / 365 * days
    return daily_interest(principal, annual_rate) * days


def chronological(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Ascending by date; ``sorted`` is stable so equal dates keep ledger order."""
    return sorted(entries, key=lambda entry: entry.date)


def raw_accrued_interest(
    entries: Iterable[LedgerEntry],
    start_date: datetime,
    annual_rate: Decimal,
    as_of: datetime,
) -> Decimal:
    """
    Replay the ledger and return the unclamped interest accumulator.

    Per-period contributions are kept as computed, including negative ones
    from a negative rate. Periods with no positive length contribute nothing.
    """
    principal = ZERO
    accrued = ZERO
    cursor = start_date

    for entry in chronological(entries):
        days = elapsed_days(cursor, entry.date)
        if days > 0:
            accrued += interest_for_period(principal, annual_rate, days)

        entry_type = entry.entry_type
        if isinstance(entry_type, CapitalAddition):
            principal += entry_type.amount
        else:
            accrued -= entry_type.to_interest
            principal -= entry_type.to_principal

        cursor = entry.date

    final_days = elapsed_days(cursor, as_of)
    if final_days > 0:
        accrued += interest_for_period(principal, annual_rate, final_days)

    return accrued


def accrued_interest(loan: Loan, as_of: datetime) -> Decimal:
    """Interest owed but not yet paid on ``loan`` as of ``as_of``, never negative."""
    raw = raw_accrued_interest(
        loan.ledger,
        start_date=loan.start_date,
        annual_rate=loan.annual_interest_rate,
        as_of=as_of,
    )
    return raw if raw > ZERO else ZERO
