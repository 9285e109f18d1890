from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from loan_ledger.domain import accrual
from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, LedgerEntryType, Payment
from loan_ledger.domain.errors import NotFoundError


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Loan:
    """
    A loan where the user is the lender.

    The ledger is the single source of truth: principal and interest are
    always derived from it and never stored. Entries live inside the loan,
    so dropping the loan drops its ledger.

    ``created_at`` is bookkeeping for list ordering only.
    """

    borrower_name: str
    start_date: datetime
    annual_interest_rate: Decimal
    notes: str = ""
    ledger: list[LedgerEntry] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    # ------------------------------------------------------------------
    # Derived balances
    # ------------------------------------------------------------------

    def current_principal(self) -> Decimal:
        """Capital added minus principal repaid, over the whole ledger."""
        total = Decimal(0)
        for entry in self.ledger:
            entry_type = entry.entry_type
            if isinstance(entry_type, CapitalAddition):
                total += entry_type.amount
            else:
                total -= entry_type.to_principal
        return total

    def accrued_interest(self, as_of: datetime) -> Decimal:
        return accrual.accrued_interest(self, as_of)

    def total_owed(self, as_of: datetime) -> Decimal:
        return self.current_principal() + self.accrued_interest(as_of)

    def daily_interest_amount(self) -> Decimal:
        return accrual.daily_interest(self.current_principal(), self.annual_interest_rate)

    def lifetime_interest_paid(self) -> Decimal:
        return sum(
            (e.entry_type.to_interest for e in self.ledger if isinstance(e.entry_type, Payment)),
            Decimal(0),
        )

    def lifetime_principal_paid(self) -> Decimal:
        return sum(
            (e.entry_type.to_principal for e in self.ledger if isinstance(e.entry_type, Payment)),
            Decimal(0),
        )

    def total_invested(self) -> Decimal:
        return sum(
            (e.entry_type.amount for e in self.ledger if isinstance(e.entry_type, CapitalAddition)),
            Decimal(0),
        )

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def chronological_ledger(self) -> list[LedgerEntry]:
        return accrual.chronological(self.ledger)

    def sorted_ledger(self) -> list[LedgerEntry]:
        """Most recent first; among equal dates the last inserted comes first."""
        return list(reversed(self.chronological_ledger()))

    # ------------------------------------------------------------------
    # Structural changes
    # ------------------------------------------------------------------

    def add_entry(self, entry: LedgerEntry) -> LedgerEntry:
        owned = dataclasses.replace(entry, loan_id=self.id)
        self.ledger.append(owned)
        return owned

    def get_entry(self, entry_id: str) -> LedgerEntry | None:
        for entry in self.ledger:
            if entry.id == entry_id:
                return entry
        return None

    def replace_entry(
        self,
        entry_id: str,
        *,
        date: datetime,
        entry_type: LedgerEntryType,
        notes: str,
    ) -> LedgerEntry:
        """Edit an entry, keeping its id and its position in the ledger."""
        index = self._index_of(entry_id)
        edited = dataclasses.replace(
            self.ledger[index],
            date=date,
            entry_type=entry_type,
            notes=notes,
            loan_id=self.id,
        )
        self.ledger[index] = edited
        return edited

    def remove_entry(self, entry_id: str) -> LedgerEntry:
        index = self._index_of(entry_id)
        return self.ledger.pop(index)

    def _index_of(self, entry_id: str) -> int:
        for index, entry in enumerate(self.ledger):
            if entry.id == entry_id:
                return index
        raise NotFoundError.entry(self.id, entry_id)
