from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry
from loan_ledger.domain.validation import (
    check_entry_date,
    check_positive_amount,
    raise_if_errors,
)
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddCapitalRequest:
    loan_id: str
    amount: Decimal
    date: datetime
    now: datetime
    notes: str = ""


class AddCapital:
    """Record additional money lent to the borrower."""

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: AddCapitalRequest) -> LedgerEntry:
        """
        Append an investment to the loan's ledger.

        Args:
            request: Loan id, amount, date and notes, plus the caller's "now"

        Returns:
            The stored entry, owned by the loan

        Raises:
            NotFoundError: If the loan does not exist
            ValidationError: If the amount is not positive or the date is
                before the loan start or in the future
        """
        loan = load_loan(self._repository, request.loan_id)

        errors = check_positive_amount("amount", request.amount)
        errors += check_entry_date(request.date, loan.start_date, request.now, label="Investment")
        raise_if_errors(errors)

        entry = loan.add_entry(
            LedgerEntry(
                date=request.date,
                entry_type=CapitalAddition(amount=request.amount),
                notes=request.notes,
            )
        )
        self._repository.save(loan)

        logger.info("Capital added", extra={"loan_id": loan.id, "entry_id": entry.id})
        return entry
