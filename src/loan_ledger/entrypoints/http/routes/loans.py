from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from loan_ledger.entrypoints.http.dependencies import (
    Clock,
    get_clock,
    get_create_loan_use_case,
    get_create_sample_loan_use_case,
    get_delete_loan_use_case,
    get_list_loans_use_case,
    get_loan_summary_use_case,
)
from loan_ledger.entrypoints.http.dtos.loans import CreateLoanDTO, LoanListDTO, LoanSummaryDTO
from loan_ledger.entrypoints.http.error_responses import NOT_FOUND_RESPONSE, VALIDATION_RESPONSE
from loan_ledger.entrypoints.http.mappers.conversions import to_utc
from loan_ledger.entrypoints.http.mappers.loan_mapper import LoanMapper
from loan_ledger.use_cases.create_loan import CreateLoan
from loan_ledger.use_cases.create_sample_loan import CreateSampleLoan
from loan_ledger.use_cases.delete_loan import DeleteLoan
from loan_ledger.use_cases.get_loan_summary import GetLoanSummary, GetLoanSummaryRequest
from loan_ledger.use_cases.list_loans import ListLoans


router = APIRouter(tags=["Loans"])


@router.post(
    "/loans",
    response_model=LoanSummaryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Open a loan",
    description="""
    Create a loan. When `initial_amount` is given it is recorded as an
    investment on the start date.

    ## Monetary Values
    - All monetary values are strings (e.g., "10000.00")
    - Rates are decimal fractions as strings ("0.08" = 8%)

    ## Validation
    - Borrower name is required
    - Rate must be between 0 and 1
    - Start date cannot be in the future
    """,
    responses={**VALIDATION_RESPONSE},
)
def create_loan(
    payload: CreateLoanDTO,
    use_case: CreateLoan = Depends(get_create_loan_use_case),
    summary_use_case: GetLoanSummary = Depends(get_loan_summary_use_case),
    clock: Clock = Depends(get_clock),
) -> LoanSummaryDTO:
    now = clock()
    loan = use_case.execute(LoanMapper.to_create_request(payload, now))
    summary = summary_use_case.execute(GetLoanSummaryRequest(loan_id=loan.id, as_of=now))
    return LoanMapper.to_summary(summary)


@router.post(
    "/loans/sample",
    response_model=LoanSummaryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a sample loan",
    description="Seed a demonstration loan (8%, started 90 days ago, with one payment).",
)
def create_sample_loan(
    use_case: CreateSampleLoan = Depends(get_create_sample_loan_use_case),
    summary_use_case: GetLoanSummary = Depends(get_loan_summary_use_case),
    clock: Clock = Depends(get_clock),
) -> LoanSummaryDTO:
    now = clock()
    loan = use_case.execute(now)
    summary = summary_use_case.execute(GetLoanSummaryRequest(loan_id=loan.id, as_of=now))
    return LoanMapper.to_summary(summary)


@router.get(
    "/loans",
    response_model=LoanListDTO,
    summary="List loans",
    description="All loans, most recently created first, with balances as of now.",
)
def list_loans(
    use_case: ListLoans = Depends(get_list_loans_use_case),
    clock: Clock = Depends(get_clock),
) -> LoanListDTO:
    now = clock()
    return LoanMapper.to_list(use_case.execute(), as_of=now)


@router.get(
    "/loans/{loan_id}",
    response_model=LoanSummaryDTO,
    summary="Get loan balances",
    description="""
    Balances, tax totals and ledger for a loan.

    ## As Of
    - `as_of` (ISO 8601) sets the moment interest is accrued to
    - Defaults to now
    - Interest is replayed from the loan start on every request
    """,
    responses={**NOT_FOUND_RESPONSE},
)
def get_loan(
    loan_id: str,
    as_of: datetime | None = Query(default=None, description="Accrue interest up to this moment"),
    use_case: GetLoanSummary = Depends(get_loan_summary_use_case),
    clock: Clock = Depends(get_clock),
) -> LoanSummaryDTO:
    moment = to_utc(as_of) if as_of is not None else clock()
    summary = use_case.execute(GetLoanSummaryRequest(loan_id=loan_id, as_of=moment))
    return LoanMapper.to_summary(summary)


@router.delete(
    "/loans/{loan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a loan",
    description="Deletes the loan and every entry in its ledger.",
    responses={**NOT_FOUND_RESPONSE},
)
def delete_loan(
    loan_id: str,
    use_case: DeleteLoan = Depends(get_delete_loan_use_case),
) -> None:
    use_case.execute(loan_id)
