from __future__ import annotations

from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository


class ListLoans:
    """All loans, newest first."""

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self) -> list[Loan]:
        return self._repository.list_all()
