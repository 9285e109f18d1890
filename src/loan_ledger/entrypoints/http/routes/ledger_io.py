from urllib.parse import quote

from fastapi import APIRouter, Depends, Response, status

from loan_ledger.entrypoints.http.dependencies import (
    Clock,
    get_clock,
    get_export_loan_use_case,
    get_import_loan_use_case,
    get_loan_summary_use_case,
    get_preview_import_use_case,
)
from loan_ledger.entrypoints.http.dtos.ledger_io import ImportPreviewDTO, ImportRequestDTO
from loan_ledger.entrypoints.http.dtos.loans import LoanSummaryDTO
from loan_ledger.entrypoints.http.error_responses import (
    CONFLICT_RESPONSE,
    IMPORT_ERROR_RESPONSE,
    NOT_FOUND_RESPONSE,
)
from loan_ledger.entrypoints.http.mappers.ledger_io_mapper import LedgerIOMapper
from loan_ledger.entrypoints.http.mappers.loan_mapper import LoanMapper
from loan_ledger.use_cases.export_loan import ExportLoan
from loan_ledger.use_cases.get_loan_summary import GetLoanSummary, GetLoanSummaryRequest
from loan_ledger.use_cases.import_loan import ImportLoan, ImportLoanRequest, PreviewImport


router = APIRouter(tags=["Import / Export"])


def content_disposition(filename: str) -> str:
    """
    Attachment header value for ``filename``.

    Header values must be latin-1, so names outside ASCII get an underscore
    fallback in ``filename`` and the real name in ``filename*`` (RFC 5987).
    """
    fallback = "".join(char if char.isascii() and char.isprintable() and char != '"' else "_" for char in filename)
    value = f'attachment; filename="{fallback}"'
    if fallback != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value


@router.get(
    "/loans/{loan_id}/export",
    summary="Export a loan as CSV",
    description="""
    Download the loan and its ledger in the CSV interchange format.

    Dates are written as `yyyy-MM-dd`, amounts with 2 decimals.
    """,
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV export"},
        **NOT_FOUND_RESPONSE,
    },
)
def export_loan(
    loan_id: str,
    use_case: ExportLoan = Depends(get_export_loan_use_case),
    clock: Clock = Depends(get_clock),
) -> Response:
    exported = use_case.execute(loan_id, clock())
    return Response(
        content=exported.content,
        media_type="text/csv",
        headers={"Content-Disposition": content_disposition(exported.filename)},
    )


@router.post(
    "/loans/import/preview",
    response_model=ImportPreviewDTO,
    summary="Preview a CSV import",
    description="Parse an export and report what it contains. Nothing is saved.",
    responses={**IMPORT_ERROR_RESPONSE},
)
def preview_import(
    payload: ImportRequestDTO,
    use_case: PreviewImport = Depends(get_preview_import_use_case),
) -> ImportPreviewDTO:
    return LedgerIOMapper.to_preview(use_case.execute(payload.csv))


@router.post(
    "/loans/import",
    response_model=LoanSummaryDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Import a loan from CSV",
    description="""
    Create a loan from an export.

    - The whole file is rejected on the first bad line
    - A loan for the same borrower name must not already exist (409)
    """,
    responses={**IMPORT_ERROR_RESPONSE, **CONFLICT_RESPONSE},
)
def import_loan(
    payload: ImportRequestDTO,
    use_case: ImportLoan = Depends(get_import_loan_use_case),
    summary_use_case: GetLoanSummary = Depends(get_loan_summary_use_case),
    clock: Clock = Depends(get_clock),
) -> LoanSummaryDTO:
    now = clock()
    loan = use_case.execute(ImportLoanRequest(csv_text=payload.csv, now=now))
    summary = summary_use_case.execute(GetLoanSummaryRequest(loan_id=loan.id, as_of=now))
    return LoanMapper.to_summary(summary)
