from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, Payment
from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository

logger = logging.getLogger(__name__)

SAMPLE_BORROWER = "Sample: Alex Johnson"
SAMPLE_RATE = Decimal("0.08")
SAMPLE_NOTES = (
    "This is a sample loan to help you explore the app. "
    "Feel free to delete it when you're ready to add your own loans."
)


class CreateSampleLoan:
    """
    Seed a demonstration loan relative to ``now``.

    - Started 90 days ago at 8% with a 10,000 investment
    - 2,500 more invested 60 days ago
    - A 500 payment (300 principal, 200 interest) 15 days ago
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, now: datetime) -> Loan:
        start_date = now - timedelta(days=90)
        loan = Loan(
            borrower_name=SAMPLE_BORROWER,
            start_date=start_date,
            annual_interest_rate=SAMPLE_RATE,
            notes=SAMPLE_NOTES,
            created_at=now,
        )
        loan.add_entry(
            LedgerEntry(
                date=start_date,
                entry_type=CapitalAddition(amount=Decimal("10000")),
                notes="Initial loan",
            )
        )
        loan.add_entry(
            LedgerEntry(
                date=now - timedelta(days=60),
                entry_type=CapitalAddition(amount=Decimal("2500")),
                notes="Additional investment",
            )
        )
        loan.add_entry(
            LedgerEntry(
                date=now - timedelta(days=15),
                entry_type=Payment(to_principal=Decimal("300"), to_interest=Decimal("200")),
                notes="First payment received",
            )
        )

        self._repository.save(loan)
        logger.info("Sample loan created", extra={"loan_id": loan.id})
        return loan
