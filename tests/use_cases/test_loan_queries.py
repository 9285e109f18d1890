"""Test suite for GetLoan, GetLoanSummary, ListLoans and DeleteLoan use cases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from loan_ledger.adapters.in_memory_loan_repository import InMemoryLoanRepository
from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, Payment
from loan_ledger.domain.errors import NotFoundError
from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.delete_loan import DeleteLoan
from loan_ledger.use_cases.get_loan import GetLoan
from loan_ledger.use_cases.get_loan_summary import GetLoanSummary, GetLoanSummaryRequest
from loan_ledger.use_cases.list_loans import ListLoans


START = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def loan() -> Loan:
    """36500 at 10%: 10 of interest per day."""
    loan = Loan(
        borrower_name="Jane Doe",
        start_date=START,
        annual_interest_rate=Decimal("0.10"),
        created_at=START,
    )
    loan.add_entry(LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("36500"))))
    loan.add_entry(
        LedgerEntry(
            date=START + timedelta(days=10),
            entry_type=Payment(to_principal=Decimal("500"), to_interest=Decimal("60")),
        )
    )
    return loan


@pytest.fixture()
def repository(loan: Loan) -> InMemoryLoanRepository:
    return InMemoryLoanRepository([loan])


# ==============================================================================
# GetLoan
# ==============================================================================


def test_get_loan_returns_stored_ledger(repository: InMemoryLoanRepository, loan: Loan) -> None:
    result = GetLoan(loan_repository=repository).execute(loan.id)

    assert result == loan
    assert result is not loan


def test_get_loan_unknown_id() -> None:
    with pytest.raises(NotFoundError):
        GetLoan(loan_repository=InMemoryLoanRepository()).execute("missing")


# ==============================================================================
# GetLoanSummary
# ==============================================================================


def test_summary_balances(repository: InMemoryLoanRepository, loan: Loan) -> None:
    as_of = START + timedelta(days=10)

    summary = GetLoanSummary(loan_repository=repository).execute(
        GetLoanSummaryRequest(loan_id=loan.id, as_of=as_of)
    )

    assert summary.as_of == as_of
    assert summary.balances.principal == Decimal("36000")
    assert summary.balances.accrued_interest == Decimal("40")
    assert summary.balances.total_owed == Decimal("36040")
    assert summary.lifetime_interest_paid == Decimal("60")
    assert summary.lifetime_principal_paid == Decimal("500")
    assert summary.total_invested == Decimal("36500")


def test_summary_ledger_is_most_recent_first(
    repository: InMemoryLoanRepository, loan: Loan
) -> None:
    summary = GetLoanSummary(loan_repository=repository).execute(
        GetLoanSummaryRequest(loan_id=loan.id, as_of=START)
    )

    assert [entry.is_payment for entry in summary.ledger] == [True, False]


def test_summary_unknown_loan() -> None:
    repository = Mock(spec=LoanRepository)
    repository.get.return_value = None

    with pytest.raises(NotFoundError) as exc_info:
        GetLoanSummary(loan_repository=repository).execute(
            GetLoanSummaryRequest(loan_id="missing", as_of=START)
        )

    assert exc_info.value.context["resource"] == "Loan"
    repository.get.assert_called_once_with("missing")


# ==============================================================================
# ListLoans
# ==============================================================================


def test_list_loans_delegates_to_repository(loan: Loan) -> None:
    repository = Mock(spec=LoanRepository)
    repository.list_all.return_value = [loan]

    assert ListLoans(loan_repository=repository).execute() == [loan]


# ==============================================================================
# DeleteLoan
# ==============================================================================


def test_delete_loan(repository: InMemoryLoanRepository, loan: Loan) -> None:
    DeleteLoan(loan_repository=repository).execute(loan.id)

    assert repository.get(loan.id) is None


def test_delete_unknown_loan(repository: InMemoryLoanRepository) -> None:
    with pytest.raises(NotFoundError):
        DeleteLoan(loan_repository=repository).execute("missing")
