from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from loan_ledger.adapters.csv_ledger_codec import ImportedLoan, import_ledger
from loan_ledger.domain.errors import ConflictError, ValidationError
from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMPORT_BYTES = 1024 * 1024


@dataclass(frozen=True, slots=True)
class ImportLoanRequest:
    csv_text: str
    now: datetime


def _check_size(csv_text: str, max_bytes: int) -> None:
    size = len(csv_text.encode("utf-8"))
    if size > max_bytes:
        raise ValidationError.for_field(
            "csv", f"Import is {size} bytes; the limit is {max_bytes}", "TOO_LARGE"
        )


class PreviewImport:
    """Parse an export and report what would be imported. Nothing is saved."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_IMPORT_BYTES) -> None:
        self._max_bytes = max_bytes

    def execute(self, csv_text: str) -> ImportedLoan:
        _check_size(csv_text, self._max_bytes)
        return import_ledger(csv_text)


class ImportLoan:
    """
    Create a loan from an export.

    Borrower names must be unique across imported loans: a file for a
    borrower that already exists is rejected rather than merged.
    """

    def __init__(
        self,
        loan_repository: LoanRepository,
        max_bytes: int = DEFAULT_MAX_IMPORT_BYTES,
    ) -> None:
        self._repository = loan_repository
        self._max_bytes = max_bytes

    def execute(self, request: ImportLoanRequest) -> Loan:
        """
        Parse ``request.csv_text`` and store it as a new loan.

        The borrower check and the insert happen in one repository call.

        Args:
            request: Export text and the creation time for the new loan

        Returns:
            The stored loan

        Raises:
            ValidationError: If the text exceeds the size limit
            LedgerImportError: If the text cannot be parsed (any subclass)
            ConflictError: If a loan for the same borrower already exists
        """
        _check_size(request.csv_text, self._max_bytes)
        imported = import_ledger(request.csv_text)

        loan = imported.to_loan(created_at=request.now)
        if not self._repository.add_if_borrower_absent(loan):
            raise ConflictError.duplicate_borrower(imported.borrower_name)

        logger.info(
            "Loan imported",
            extra={"loan_id": loan.id, "entries": len(loan.ledger)},
        )
        return loan
