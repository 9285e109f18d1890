from __future__ import annotations

import logging

from loan_ledger.domain.errors import NotFoundError
from loan_ledger.ports.loan_repository import LoanRepository

logger = logging.getLogger(__name__)


class DeleteLoan:
    """Delete a loan together with every entry in its ledger."""

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, loan_id: str) -> None:
        if not self._repository.delete(loan_id):
            raise NotFoundError.loan(loan_id)
        logger.info("Loan deleted", extra={"loan_id": loan_id})
