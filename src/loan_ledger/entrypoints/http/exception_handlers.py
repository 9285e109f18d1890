"""Translate ledger errors into JSON responses.

Every error body carries ``detail`` and ``code``. Validation failures add an
``errors`` list; row-level CSV import failures add ``line_number``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loan_ledger.domain.errors import DomainError, FieldError, field_error

logger = logging.getLogger(__name__)

# Starlette renamed this constant; the number is stable
HTTP_422 = 422

# Codes not listed here (every CSV import error among them) map to 400.
STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": HTTP_422,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Keys of DomainError.details() returned to clients; the rest is logged only
PUBLIC_DETAILS = ("errors", "line_number")

REQUEST_LOCATIONS = frozenset({"body", "query", "path"})


def status_for(exc: DomainError) -> int:
    return STATUS_BY_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST)


def error_body(detail: str, code: str, **extra: Any) -> dict[str, Any]:
    return {"detail": detail, "code": code, **extra}


def _request_fields(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


def _field_path(location: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in location if part not in REQUEST_LOCATIONS)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Map a domain error to its status code and structured body.

    Server-side codes are logged at ERROR together with the error context;
    client errors are logged at INFO.

    Args:
        request: Incoming request, used for the log record only
        exc: Any DomainError, CSV import errors included

    Returns:
        JSON body with ``detail`` and ``code``, plus ``errors`` or
        ``line_number`` when the error carries them
    """
    status_code = status_for(exc)
    log_fields = {
        "error_code": exc.error_code,
        "error_message": exc.message,
        **_request_fields(request),
    }
    if status_code >= 500:
        logger.error("Domain error occurred", extra={**log_fields, "context": exc.context})
    else:
        logger.info("Client error", extra=log_fields)

    details = exc.details()
    public = {key: details[key] for key in PUBLIC_DETAILS if key in details}
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.message, exc.error_code, **public),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Payloads pydantic rejects before any use case runs.

    Examples:
        - amount="12.345" (more than 2 decimals)
        - strategy="whatever"
        - Missing required field

    Args:
        request: Incoming request
        exc: Pydantic validation error

    Returns:
        422 with one ``errors`` item per failing field, named by its path in
        the payload
    """
    errors: list[FieldError] = [
        field_error(_field_path(error["loc"]), error["msg"], error["type"])
        for error in exc.errors()
    ]

    logger.info(
        "Request validation error",
        extra={"errors": errors, **_request_fields(request)},
    )

    return JSONResponse(
        status_code=HTTP_422,
        content=error_body("Invalid request parameters", "VALIDATION_ERROR", errors=errors),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and hide the details from the client."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_fields(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``. Call once, from the app factory."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.debug("Exception handlers registered")
