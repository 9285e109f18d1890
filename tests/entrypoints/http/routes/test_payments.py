"""
Test suite for the payment preview and commit routes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from loan_ledger.adapters.in_memory_loan_repository import InMemoryLoanRepository
from loan_ledger.domain.entries import CapitalAddition, LedgerEntry
from loan_ledger.domain.loan import Loan
from loan_ledger.domain.payments import Custom, preview_payment
from loan_ledger.entrypoints.http.dependencies import (
    get_clock,
    get_loan_repository,
    get_preview_payment_use_case,
)
from loan_ledger.entrypoints.http.exception_handlers import register_exception_handlers
from loan_ledger.entrypoints.http.routes.payments import router


START = datetime(2024, 1, 1, tzinfo=timezone.utc)
NOW = START + timedelta(days=20)


@pytest.fixture
def repository() -> InMemoryLoanRepository:
    return InMemoryLoanRepository()


@pytest.fixture
def app(repository: InMemoryLoanRepository) -> FastAPI:
    """Create a test FastAPI app with the payments router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_loan_repository] = lambda: repository
    test_app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def loan(repository: InMemoryLoanRepository) -> Loan:
    """36500 at 10%: 200 accrued by NOW."""
    loan = Loan(borrower_name="Jane Doe", start_date=START, annual_interest_rate=Decimal("0.10"))
    loan.add_entry(LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("36500"))))
    repository.save(loan)
    return loan


# ==============================================================================
# POST /v1/loans/{loan_id}/payments/preview
# ==============================================================================


def test_preview_interest_first(
    client: TestClient, repository: InMemoryLoanRepository, loan: Loan
) -> None:
    response = client.post(f"/v1/loans/{loan.id}/payments/preview", json={"amount": "500"})

    assert response.status_code == 200
    assert response.json() == {
        "payment_amount": "500.00",
        "applied_to_principal": "300.00",
        "applied_to_interest": "200.00",
        "principal_before": "36500.00",
        "principal_after": "36200.00",
        "principal_change": "-300.00",
        "interest_before": "200.00",
        "interest_after": "0.00",
        "interest_change": "-200.00",
        "total_before": "36700.00",
        "total_after": "36200.00",
        "total_change": "-500.00",
        "daily_interest_before": "10.00",
        "daily_interest_after": "9.92",
        "daily_interest_change": "-0.08",
    }
    stored = repository.get(loan.id)
    assert stored is not None
    assert len(stored.ledger) == 1


def test_preview_principal_only(client: TestClient, loan: Loan) -> None:
    """500 paid with 200 accrued goes entirely to principal."""
    response = client.post(
        f"/v1/loans/{loan.id}/payments/preview",
        json={"amount": "500", "strategy": "principal_only"},
    )

    assert response.status_code == 200
    assert response.json()["applied_to_principal"] == "500.00"
    assert response.json()["applied_to_interest"] == "0.00"


def test_preview_maps_strategy_for_use_case(app: FastAPI, client: TestClient, loan: Loan) -> None:
    """Route hands the use case a domain request with the parsed strategy."""
    strategy = Custom(principal=Decimal("100"), interest=Decimal("0.50"))
    mock_use_case = Mock()
    mock_use_case.execute.return_value = preview_payment(
        loan, Decimal("100.50"), strategy, datetime(2024, 1, 5, tzinfo=timezone.utc)
    )
    app.dependency_overrides[get_preview_payment_use_case] = lambda: mock_use_case

    response = client.post(
        f"/v1/loans/{loan.id}/payments/preview",
        json={
            "amount": "100.50",
            "strategy": "custom",
            "custom_principal": "100",
            "custom_interest": "0.50",
            "date": "2024-01-05T00:00:00Z",
        },
    )

    assert response.status_code == 200
    assert response.json()["applied_to_interest"] == "0.50"
    request = mock_use_case.execute.call_args[0][0]
    assert request.loan_id == loan.id
    assert request.amount == Decimal("100.50")
    assert request.strategy == strategy
    assert request.date == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert request.now == NOW


def test_preview_unknown_loan(client: TestClient) -> None:
    response = client.post("/v1/loans/missing/payments/preview", json={"amount": "1"})

    assert response.status_code == 404


# ==============================================================================
# POST /v1/loans/{loan_id}/payments
# ==============================================================================


def test_commit_payment(client: TestClient, repository: InMemoryLoanRepository, loan: Loan) -> None:
    response = client.post(
        f"/v1/loans/{loan.id}/payments",
        json={"amount": "500", "notes": "June"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "Payment"
    assert data["principal_paid"] == "300.00"
    assert data["interest_paid"] == "200.00"
    assert data["notes"] == "June"
    assert data["date"] == "2024-01-21T00:00:00Z"

    stored = repository.get(loan.id)
    assert stored is not None
    assert stored.current_principal() == Decimal("36200")


def test_commit_custom_split(client: TestClient, loan: Loan) -> None:
    response = client.post(
        f"/v1/loans/{loan.id}/payments",
        json={
            "amount": "100",
            "strategy": "custom",
            "custom_principal": "60",
            "custom_interest": "40",
        },
    )

    assert response.status_code == 201
    assert response.json()["description"] == "-100.00 (Split)"


# ==============================================================================
# Validation
# ==============================================================================


def test_custom_split_must_add_up(client: TestClient, repository: InMemoryLoanRepository, loan: Loan) -> None:
    response = client.post(
        f"/v1/loans/{loan.id}/payments",
        json={
            "amount": "100",
            "strategy": "custom",
            "custom_principal": "60",
            "custom_interest": "39.99",
        },
    )

    assert response.status_code == 422
    assert response.json()["errors"] == [
        {
            "field": "split",
            "message": "Principal + Interest must equal total payment amount",
            "code": "SPLIT_MISMATCH",
        }
    ]
    stored = repository.get(loan.id)
    assert stored is not None
    assert len(stored.ledger) == 1


def test_custom_split_requires_both_parts(client: TestClient, loan: Loan) -> None:
    response = client.post(
        f"/v1/loans/{loan.id}/payments",
        json={"amount": "100", "strategy": "custom"},
    )

    assert response.status_code == 422
    assert [error["field"] for error in response.json()["errors"]] == [
        "custom_principal",
        "custom_interest",
    ]


@pytest.mark.parametrize(
    "payload, code",
    [
        ({"amount": "0"}, "INVALID_VALUE"),
        ({"amount": "10", "date": "2023-12-01T00:00:00Z"}, "DATE_BEFORE_START"),
        ({"amount": "10", "date": "2024-02-01T00:00:00Z"}, "DATE_IN_FUTURE"),
    ],
)
def test_payment_business_validation(client: TestClient, loan: Loan, payload: dict, code: str) -> None:
    response = client.post(f"/v1/loans/{loan.id}/payments", json=payload)

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == code


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "-5"},
        {"amount": "abc"},
        {"amount": "5", "strategy": "everything"},
        {},
    ],
)
def test_payment_request_validation(client: TestClient, loan: Loan, payload: dict) -> None:
    response = client.post(f"/v1/loans/{loan.id}/payments", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid request parameters"
