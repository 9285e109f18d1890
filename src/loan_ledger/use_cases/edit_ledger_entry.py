from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, LedgerEntryType
from loan_ledger.domain.errors import NotFoundError
from loan_ledger.domain.validation import (
    check_entry_date,
    check_positive_amount,
    check_split_parts,
    raise_if_errors,
)
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EditLedgerEntryRequest:
    loan_id: str
    entry_id: str
    date: datetime
    entry_type: LedgerEntryType
    now: datetime
    notes: str = ""


class EditLedgerEntry:
    """
    Correct an existing entry.

    The entry keeps its id and ledger position; balances follow on the next
    query since they are always replayed from the ledger.
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: EditLedgerEntryRequest) -> LedgerEntry:
        """
        Args:
            request: Target entry plus its replacement date, type and notes

        Returns:
            The edited entry

        Raises:
            NotFoundError: If the loan or the entry does not exist
            ValidationError: If the new amounts or date are invalid
        """
        loan = load_loan(self._repository, request.loan_id)
        if loan.get_entry(request.entry_id) is None:
            raise NotFoundError.entry(request.loan_id, request.entry_id)

        entry_type = request.entry_type
        if isinstance(entry_type, CapitalAddition):
            errors = check_positive_amount("amount", entry_type.amount)
        else:
            errors = check_split_parts(entry_type.to_principal, entry_type.to_interest)
            if not errors:
                errors += check_positive_amount("amount", entry_type.total_amount)
        errors += check_entry_date(request.date, loan.start_date, request.now)
        raise_if_errors(errors)

        edited = loan.replace_entry(
            request.entry_id,
            date=request.date,
            entry_type=entry_type,
            notes=request.notes,
        )
        self._repository.save(loan)

        logger.info("Ledger entry edited", extra={"loan_id": loan.id, "entry_id": edited.id})
        return edited
