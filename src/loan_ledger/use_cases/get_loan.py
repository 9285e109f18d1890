from __future__ import annotations

from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan


class GetLoan:
    """
    Fetch a loan and its ledger as stored.

    No balances are computed, so reading the ledger does not replay accrual.
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, loan_id: str) -> Loan:
        """
        Args:
            loan_id: Identifier of the loan

        Returns:
            A snapshot of the loan; changing it does not touch the store

        Raises:
            NotFoundError: If no loan has this id
        """
        return load_loan(self._repository, loan_id)
