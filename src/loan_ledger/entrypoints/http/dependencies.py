"""
Dependency injection for FastAPI routes.

Key principles:
- The loan repository is the process-wide store, so it is cached
- Use cases are cheap and built per request
- "Now" is resolved here and passed down; domain code never reads a clock
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable

from fastapi import Depends

from loan_ledger.adapters.in_memory_loan_repository import InMemoryLoanRepository
from loan_ledger.infra.config import max_import_bytes
from loan_ledger.ports.loan_repository import LoanRepository
from loan_ledger.use_cases.add_capital import AddCapital
from loan_ledger.use_cases.commit_payment import CommitPayment
from loan_ledger.use_cases.create_loan import CreateLoan
from loan_ledger.use_cases.create_sample_loan import CreateSampleLoan
from loan_ledger.use_cases.delete_ledger_entry import DeleteLedgerEntry
from loan_ledger.use_cases.delete_loan import DeleteLoan
from loan_ledger.use_cases.edit_ledger_entry import EditLedgerEntry
from loan_ledger.use_cases.export_loan import ExportLoan
from loan_ledger.use_cases.get_loan import GetLoan
from loan_ledger.use_cases.get_loan_summary import GetLoanSummary
from loan_ledger.use_cases.import_loan import ImportLoan, PreviewImport
from loan_ledger.use_cases.list_loans import ListLoans
from loan_ledger.use_cases.preview_payment import PreviewPayment

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    """Source of "now" for defaults and future-date checks. Overridden in tests."""
    return utc_now


@lru_cache(maxsize=1)
def get_loan_repository() -> LoanRepository:
    """
    Process-wide loan store.

    The in-memory repository hands out snapshots under a lock, so sharing one
    instance across requests is safe.
    """
    return InMemoryLoanRepository()


def get_create_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> CreateLoan:
    return CreateLoan(loan_repository=repository)


def get_create_sample_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> CreateSampleLoan:
    return CreateSampleLoan(loan_repository=repository)


def get_list_loans_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> ListLoans:
    return ListLoans(loan_repository=repository)


def get_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> GetLoan:
    return GetLoan(loan_repository=repository)


def get_loan_summary_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> GetLoanSummary:
    return GetLoanSummary(loan_repository=repository)


def get_delete_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> DeleteLoan:
    return DeleteLoan(loan_repository=repository)


def get_add_capital_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> AddCapital:
    return AddCapital(loan_repository=repository)


def get_edit_ledger_entry_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> EditLedgerEntry:
    return EditLedgerEntry(loan_repository=repository)


def get_delete_ledger_entry_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> DeleteLedgerEntry:
    return DeleteLedgerEntry(loan_repository=repository)


def get_preview_payment_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> PreviewPayment:
    return PreviewPayment(loan_repository=repository)


def get_commit_payment_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> CommitPayment:
    return CommitPayment(loan_repository=repository)


def get_export_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> ExportLoan:
    return ExportLoan(loan_repository=repository)


def get_preview_import_use_case() -> PreviewImport:
    return PreviewImport(max_bytes=max_import_bytes())


def get_import_loan_use_case(
    repository: LoanRepository = Depends(get_loan_repository),
) -> ImportLoan:
    return ImportLoan(loan_repository=repository, max_bytes=max_import_bytes())
