"""OpenAPI models for the error bodies written by ``exception_handlers``."""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One failing request field."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "date",
                "message": "Payment date cannot be in the future",
                "code": "DATE_IN_FUTURE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)
    - CSV row errors (detail + line_number)

    Examples:
        Simple error:
            {
                "detail": "Loan with identifier '...' not found",
                "code": "NOT_FOUND"
            }

        Import error on a ledger row:
            {
                "detail": "Invalid transaction on line 7: Invalid amount",
                "code": "INVALID_TRANSACTION",
                "line_number": 7
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
    line_number: int | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Loan not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "amount",
                            "message": "Amount must be greater than zero",
                            "code": "INVALID_VALUE",
                        },
                        {
                            "field": "split",
                            "message": "Principal + Interest must equal total payment amount",
                            "code": "SPLIT_MISMATCH",
                        },
                    ],
                },
                {
                    "detail": "Invalid transaction on line 7: Invalid amount",
                    "code": "INVALID_TRANSACTION",
                    "line_number": 7,
                },
            ]
        }
    )


# Shared OpenAPI ``responses`` entries for routes
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Loan or entry not found"}}
VALIDATION_RESPONSE = {422: {"model": ErrorResponse, "description": "Validation error"}}
CONFLICT_RESPONSE = {
    409: {"model": ErrorResponse, "description": "A loan for this borrower already exists"}
}
IMPORT_ERROR_RESPONSE = {
    400: {
        "model": ErrorResponse,
        "description": "File does not match the export format",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Invalid transaction on line 7: Payment total doesn't match principal + interest",
                    "code": "INVALID_TRANSACTION",
                    "line_number": 7,
                }
            }
        },
    }
}
