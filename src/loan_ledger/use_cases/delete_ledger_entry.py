from __future__ import annotations

import logging

from loan_ledger.domain.entries import LedgerEntry
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan

logger = logging.getLogger(__name__)


class DeleteLedgerEntry:
    """Remove one entry; the loan itself stays."""

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, loan_id: str, entry_id: str) -> LedgerEntry:
        loan = load_loan(self._repository, loan_id)
        removed = loan.remove_entry(entry_id)
        self._repository.save(loan)

        logger.info("Ledger entry deleted", extra={"loan_id": loan.id, "entry_id": entry_id})
        return removed
