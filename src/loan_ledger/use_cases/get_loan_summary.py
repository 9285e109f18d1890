from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.domain.entries import LedgerEntry
from loan_ledger.domain.loan import Loan
from loan_ledger.domain.payments import Balances, compute_balances
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan


@dataclass(frozen=True, slots=True)
class GetLoanSummaryRequest:
    loan_id: str
    as_of: datetime


@dataclass(frozen=True, slots=True)
class LoanSummary:
    """Point-in-time view of a loan, with the lifetime totals used for tax reporting."""

    loan: Loan
    as_of: datetime
    balances: Balances
    lifetime_interest_paid: Decimal
    lifetime_principal_paid: Decimal
    total_invested: Decimal
    ledger: list[LedgerEntry]


class GetLoanSummary:
    """
    Compute balances for one loan as of a given moment.

    The ledger is replayed on every call; ``as_of`` is supplied by the
    caller and never read from a clock here.
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: GetLoanSummaryRequest) -> LoanSummary:
        """
        Args:
            request: Loan id and the moment to compute balances for

        Returns:
            Balances as of ``request.as_of``, lifetime totals and the ledger
            most recent first

        Raises:
            NotFoundError: If the loan does not exist
        """
        loan = load_loan(self._repository, request.loan_id)

        return LoanSummary(
            loan=loan,
            as_of=request.as_of,
            balances=compute_balances(loan, request.as_of),
            lifetime_interest_paid=loan.lifetime_interest_paid(),
            lifetime_principal_paid=loan.lifetime_principal_paid(),
            total_invested=loan.total_invested(),
            ledger=loan.sorted_ledger(),
        )
