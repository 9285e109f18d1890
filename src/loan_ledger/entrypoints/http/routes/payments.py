from fastapi import APIRouter, Depends, status

from loan_ledger.entrypoints.http.dependencies import (
    Clock,
    get_clock,
    get_commit_payment_use_case,
    get_preview_payment_use_case,
)
from loan_ledger.entrypoints.http.dtos.loans import LedgerEntryDTO
from loan_ledger.entrypoints.http.dtos.payments import PaymentDTO, PaymentImpactDTO
from loan_ledger.entrypoints.http.error_responses import NOT_FOUND_RESPONSE, VALIDATION_RESPONSE
from loan_ledger.entrypoints.http.mappers.loan_mapper import LoanMapper
from loan_ledger.entrypoints.http.mappers.payment_mapper import PaymentMapper
from loan_ledger.use_cases.commit_payment import CommitPayment
from loan_ledger.use_cases.preview_payment import PreviewPayment


router = APIRouter(tags=["Payments"])

PAYMENT_RULES = """
    ## Strategies
    - `interest_first`: accrued interest is paid first, the rest reduces principal
    - `principal_only`: everything reduces principal
    - `custom`: `custom_principal` + `custom_interest` must equal `amount` exactly

    ## Validation
    - Amount must be greater than zero
    - Date defaults to now; cannot be before the loan start or in the future
"""


@router.post(
    "/loans/{loan_id}/payments/preview",
    response_model=PaymentImpactDTO,
    summary="Preview a payment",
    description="Before/after principal, interest, total and daily interest. Nothing is saved."
    + PAYMENT_RULES,
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
def preview_payment(
    loan_id: str,
    payload: PaymentDTO,
    use_case: PreviewPayment = Depends(get_preview_payment_use_case),
    clock: Clock = Depends(get_clock),
) -> PaymentImpactDTO:
    request = PaymentMapper.to_domain_request(loan_id, payload, clock())
    impact = use_case.execute(request)
    return PaymentMapper.to_impact_response(impact)


@router.post(
    "/loans/{loan_id}/payments",
    response_model=LedgerEntryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Log a payment",
    description="Append a payment entry split by the chosen strategy." + PAYMENT_RULES,
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
def commit_payment(
    loan_id: str,
    payload: PaymentDTO,
    use_case: CommitPayment = Depends(get_commit_payment_use_case),
    clock: Clock = Depends(get_clock),
) -> LedgerEntryDTO:
    request = PaymentMapper.to_domain_request(loan_id, payload, clock())
    entry = use_case.execute(request)
    return LoanMapper.entry_to_dto(entry)
