from fastapi import FastAPI

from loan_ledger.entrypoints.http.exception_handlers import register_exception_handlers
from loan_ledger.entrypoints.http.routes.health import router as health_router
from loan_ledger.entrypoints.http.routes.ledger import router as ledger_router
from loan_ledger.entrypoints.http.routes.ledger_io import router as ledger_io_router
from loan_ledger.entrypoints.http.routes.loans import router as loans_router
from loan_ledger.entrypoints.http.routes.payments import router as payments_router
from loan_ledger.infra.config import log_level
from loan_ledger.infra.logging_config import setup_logging

API_PREFIX = "/v1"

# Order matters: /loans/import must match before /loans/{loan_id}
VERSIONED_ROUTERS = (ledger_io_router, loans_router, ledger_router, payments_router)

OPENAPI_TAGS = [
    {"name": "Loans", "description": "Open, list, inspect and delete loans"},
    {"name": "Ledger", "description": "Capital additions and edits to existing entries"},
    {"name": "Payments", "description": "Preview a payment's effect, then log it"},
    {"name": "Import / Export", "description": "CSV interchange for a single loan"},
    {"name": "health", "description": "Liveness"},
]


def build_app() -> FastAPI:
    setup_logging(log_level())

    app = FastAPI(
        title="Loan Ledger API",
        description="""
        Personal loan tracker: ledger of investments and payments with
        continuously accruing simple interest.

        ## Interest
        Simple interest on outstanding principal, prorated by fractional days
        over a 365-day year. Unpaid interest is never capitalized, and every
        balance is recomputed from the full ledger, so edits to past entries
        take effect immediately.

        ## Money
        Amounts are sent and returned as decimal strings. Responses are
        rounded half-up to cents; calculations keep full precision.

        ## Errors
        Every error body has `detail` and `code`. Validation errors add an
        `errors` list; CSV row errors add `line_number`.
        """,
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={"name": "Proprietary"},
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    for router in VERSIONED_ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    return app


app = build_app()
