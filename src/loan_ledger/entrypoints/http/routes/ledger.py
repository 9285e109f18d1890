from fastapi import APIRouter, Depends, status

from loan_ledger.entrypoints.http.dependencies import (
    Clock,
    get_add_capital_use_case,
    get_clock,
    get_delete_ledger_entry_use_case,
    get_edit_ledger_entry_use_case,
    get_loan_use_case,
)
from loan_ledger.entrypoints.http.dtos.loans import (
    CapitalDTO,
    EditEntryDTO,
    LedgerDTO,
    LedgerEntryDTO,
)
from loan_ledger.entrypoints.http.error_responses import NOT_FOUND_RESPONSE, VALIDATION_RESPONSE
from loan_ledger.entrypoints.http.mappers.loan_mapper import LoanMapper
from loan_ledger.use_cases.add_capital import AddCapital
from loan_ledger.use_cases.delete_ledger_entry import DeleteLedgerEntry
from loan_ledger.use_cases.edit_ledger_entry import EditLedgerEntry
from loan_ledger.use_cases.get_loan import GetLoan


router = APIRouter(tags=["Ledger"])


@router.get(
    "/loans/{loan_id}/ledger",
    response_model=LedgerDTO,
    summary="List ledger entries",
    description="Entries most recent first; among same-date entries the last added comes first.",
    responses={**NOT_FOUND_RESPONSE},
)
def get_ledger(
    loan_id: str,
    use_case: GetLoan = Depends(get_loan_use_case),
) -> LedgerDTO:
    return LoanMapper.to_ledger(use_case.execute(loan_id))


@router.post(
    "/loans/{loan_id}/capital",
    response_model=LedgerEntryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add capital",
    description="""
    Record an additional investment.

    ## Validation
    - Amount must be greater than zero
    - Date defaults to now; cannot be before the loan start or in the future
    """,
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
def add_capital(
    loan_id: str,
    payload: CapitalDTO,
    use_case: AddCapital = Depends(get_add_capital_use_case),
    clock: Clock = Depends(get_clock),
) -> LedgerEntryDTO:
    entry = use_case.execute(LoanMapper.to_capital_request(loan_id, payload, clock()))
    return LoanMapper.entry_to_dto(entry)


@router.put(
    "/loans/{loan_id}/ledger/{entry_id}",
    response_model=LedgerEntryDTO,
    summary="Edit a ledger entry",
    description="Replace an entry's date, amounts and notes. Balances are recomputed on the next read.",
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
def edit_entry(
    loan_id: str,
    entry_id: str,
    payload: EditEntryDTO,
    use_case: EditLedgerEntry = Depends(get_edit_ledger_entry_use_case),
    clock: Clock = Depends(get_clock),
) -> LedgerEntryDTO:
    entry = use_case.execute(LoanMapper.to_edit_request(loan_id, entry_id, payload, clock()))
    return LoanMapper.entry_to_dto(entry)


@router.delete(
    "/loans/{loan_id}/ledger/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a ledger entry",
    responses={**NOT_FOUND_RESPONSE},
)
def delete_entry(
    loan_id: str,
    entry_id: str,
    use_case: DeleteLedgerEntry = Depends(get_delete_ledger_entry_use_case),
) -> None:
    use_case.execute(loan_id, entry_id)
