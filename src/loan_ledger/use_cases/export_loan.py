from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from loan_ledger.adapters.csv_ledger_codec import export_ledger
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan


@dataclass(frozen=True, slots=True)
class ExportedLedger:
    filename: str
    content: str


def export_filename(borrower_name: str, exported_on: datetime) -> str:
    """``<borrower>_Export_<yyyy-MM-dd>.csv`` with path separators, colons and quotes replaced."""
    sanitized = borrower_name
    for char in (":", "/", "\\", '"'):
        sanitized = sanitized.replace(char, "-")
    return f"{sanitized.strip()}_Export_{exported_on.date().isoformat()}.csv"


class ExportLoan:
    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, loan_id: str, now: datetime) -> ExportedLedger:
        loan = load_loan(self._repository, loan_id)
        return ExportedLedger(
            filename=export_filename(loan.borrower_name, now),
            content=export_ledger(loan),
        )
