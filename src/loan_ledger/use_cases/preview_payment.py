from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from loan_ledger.domain.loan import Loan
from loan_ledger.domain.payments import PaymentImpact, PaymentStrategy, preview_payment
from loan_ledger.domain.validation import (
    check_entry_date,
    check_positive_amount,
    check_strategy,
    raise_if_errors,
)
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.loan_lookup import load_loan


@dataclass(frozen=True, slots=True)
class PaymentRequest:
    loan_id: str
    amount: Decimal
    strategy: PaymentStrategy
    date: datetime
    now: datetime
    notes: str = ""

    def validate(self, loan: Loan) -> None:
        errors = check_positive_amount("amount", self.amount)
        errors += check_entry_date(self.date, loan.start_date, self.now, label="Payment")
        if not errors:
            errors += check_strategy(self.amount, self.strategy)
        raise_if_errors(errors)


class PreviewPayment:
    """Show the effect of a payment before it is logged. Nothing is saved."""

    def __init__(self, loan_repository: LoanRepository) -> None:
        self._repository = loan_repository

    def execute(self, request: PaymentRequest) -> PaymentImpact:
        """
        Compute the before/after snapshot for a payment.

        Interest is accrued up to ``request.date``, so back-dated payments
        preview against the interest owed on that day.

        Args:
            request: Amount, strategy and date of the payment

        Returns:
            Split of the payment and balances before and after it

        Raises:
            NotFoundError: If the loan does not exist
            ValidationError: If amount, date or custom split are invalid
        """
        loan = load_loan(self._repository, request.loan_id)
        request.validate(loan)
        return preview_payment(loan, request.amount, request.strategy, request.date)
