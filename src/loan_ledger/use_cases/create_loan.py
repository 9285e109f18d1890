from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry
from loan_ledger.domain.errors import field_error
from loan_ledger.domain.loan import Loan
from loan_ledger.domain.validation import (
    check_annual_rate,
    check_borrower_name,
    check_positive_amount,
    raise_if_errors,
)
from loan_ledger.ports.loan_repository import LoanRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateLoanRequest:
    borrower_name: str
    start_date: datetime
    annual_interest_rate: Decimal
    now: datetime
    initial_amount: Decimal | None = None
    notes: str = ""

    def validate(self) -> None:
        errors = check_borrower_name(self.borrower_name)
        errors += check_annual_rate(self.annual_interest_rate)
        if self.initial_amount is not None:
            errors += check_positive_amount("initial_amount", self.initial_amount)
        if self.start_date > self.now:
            errors.append(
                field_error("start_date", "Start date cannot be in the future", "DATE_IN_FUTURE")
            )
        raise_if_errors(errors)


class CreateLoan:
    """
    Open a new loan.

    When an initial amount is given, it is recorded as an investment on the
    start date, so the loan starts accruing from day one.
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: CreateLoanRequest) -> Loan:
        """
        Validate the request and store a new loan.

        Every field problem is reported at once rather than stopping at the
        first one.

        Args:
            request: Borrower, start date, rate and optional initial amount

        Returns:
            The stored loan

        Raises:
            ValidationError: If any field is invalid
        """
        request.validate()

        loan = Loan(
            borrower_name=request.borrower_name.strip(),
            start_date=request.start_date,
            annual_interest_rate=request.annual_interest_rate,
            notes=request.notes,
            created_at=request.now,
        )
        if request.initial_amount is not None:
            loan.add_entry(
                LedgerEntry(
                    date=request.start_date,
                    entry_type=CapitalAddition(amount=request.initial_amount),
                )
            )

        self._repository.save(loan)
        logger.info("Loan created", extra={"loan_id": loan.id, "entries": len(loan.ledger)})
        return loan
