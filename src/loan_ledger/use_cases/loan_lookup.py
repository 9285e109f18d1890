from __future__ import annotations

from loan_ledger.domain.errors import NotFoundError
from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository


def load_loan(repository: LoanRepository, loan_id: str) -> Loan:
    """Fetch a loan snapshot or raise NotFoundError."""
    loan = repository.get(loan_id)
    if loan is None:
        raise NotFoundError.loan(loan_id)
    return loan
