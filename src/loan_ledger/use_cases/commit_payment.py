from __future__ import annotations

import logging

from loan_ledger.domain.entries import LedgerEntry
from loan_ledger.domain.payments import build_payment_entry
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan
from loan_ledger.use_cases.preview_payment import PaymentRequest

logger = logging.getLogger(__name__)


class CommitPayment:
    """
    Log a payment.

    The split is the one a preview of the same request shows, computed
    against the ledger as it stands when the payment is committed.
    """

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: PaymentRequest) -> LedgerEntry:
        """
        Args:
            request: Same shape as for PreviewPayment

        Returns:
            The payment entry appended to the ledger

        Raises:
            NotFoundError: If the loan does not exist
            ValidationError: If amount, date or custom split are invalid
        """
        loan = load_loan(self._repository, request.loan_id)
        request.validate(loan)

        entry = loan.add_entry(
            build_payment_entry(
                loan,
                amount=request.amount,
                strategy=request.strategy,
                date=request.date,
                notes=request.notes,
            )
        )
        self._repository.save(loan)

        logger.info("Payment logged", extra={"loan_id": loan.id, "entry_id": entry.id})
        return entry
