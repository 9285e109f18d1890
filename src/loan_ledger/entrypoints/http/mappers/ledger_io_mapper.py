from __future__ import annotations

from loan_ledger.adapters.csv_ledger_codec import ImportedLoan
from loan_ledger.entrypoints.http.dtos.ledger_io import ImportPreviewDTO
from loan_ledger.entrypoints.http.mappers.conversions import money


class LedgerIOMapper:
    """Maps parsed CSV imports to response DTOs."""

    @staticmethod
    def to_preview(imported: ImportedLoan) -> ImportPreviewDTO:
        return ImportPreviewDTO(
            borrower_name=imported.borrower_name,
            start_date=imported.start_date,
            annual_interest_rate=str(imported.annual_interest_rate),
            entry_count=len(imported.entries),
            total_investments=money(imported.total_investments),
            total_payments=money(imported.total_payments),
        )
