"""
Unit tests for PaymentMapper and LedgerIOMapper.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from loan_ledger.adapters.csv_ledger_codec import ImportedLoan
from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, Payment
from loan_ledger.domain.errors import ValidationError
from loan_ledger.domain.payments import Custom, InterestFirst, PaymentImpact, PrincipalOnly
from loan_ledger.entrypoints.http.dtos.payments import PaymentDTO
from loan_ledger.entrypoints.http.mappers.ledger_io_mapper import LedgerIOMapper
from loan_ledger.entrypoints.http.mappers.payment_mapper import PaymentMapper


NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


# ==============================================================================
# PaymentMapper.to_domain_request
# ==============================================================================


class TestToDomainRequest:
    @pytest.mark.parametrize(
        "strategy, expected",
        [
            ("interest_first", InterestFirst()),
            ("principal_only", PrincipalOnly()),
        ],
    )
    def test_maps_strategy(self, strategy: str, expected) -> None:
        dto = PaymentDTO(amount="500.00", strategy=strategy)

        request = PaymentMapper.to_domain_request("loan-1", dto, NOW)

        assert request.strategy == expected
        assert request.amount == Decimal("500.00")
        assert request.loan_id == "loan-1"

    def test_strategy_defaults_to_interest_first(self) -> None:
        request = PaymentMapper.to_domain_request("loan-1", PaymentDTO(amount="1"), NOW)

        assert request.strategy == InterestFirst()

    def test_custom_strategy_carries_parts(self) -> None:
        dto = PaymentDTO(
            amount="100", strategy="custom", custom_principal="60.25", custom_interest="39.75"
        )

        request = PaymentMapper.to_domain_request("loan-1", dto, NOW)

        assert request.strategy == Custom(principal=Decimal("60.25"), interest=Decimal("39.75"))

    def test_custom_parts_ignored_for_other_strategies(self) -> None:
        dto = PaymentDTO(amount="100", strategy="principal_only", custom_principal="1")

        request = PaymentMapper.to_domain_request("loan-1", dto, NOW)

        assert request.strategy == PrincipalOnly()

    def test_custom_strategy_requires_both_parts(self) -> None:
        dto = PaymentDTO(amount="100", strategy="custom", custom_interest="40")

        with pytest.raises(ValidationError) as exc_info:
            PaymentMapper.to_domain_request("loan-1", dto, NOW)

        assert exc_info.value.errors == [
            {
                "field": "custom_principal",
                "message": "Required for custom strategy",
                "code": "REQUIRED",
            }
        ]

    def test_date_defaults_to_now(self) -> None:
        request = PaymentMapper.to_domain_request("loan-1", PaymentDTO(amount="1"), NOW)

        assert request.date == NOW
        assert request.now == NOW

    def test_naive_date_is_utc(self) -> None:
        dto = PaymentDTO(amount="1", date=datetime(2024, 3, 1), notes="March")

        request = PaymentMapper.to_domain_request("loan-1", dto, NOW)

        assert request.date == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert request.notes == "March"


# ==============================================================================
# PaymentMapper.to_impact_response
# ==============================================================================


class TestToImpactResponse:
    def test_rounds_every_field_to_cents(self) -> None:
        impact = PaymentImpact(
            payment_amount=Decimal("500"),
            applied_to_principal=Decimal("299.995"),
            applied_to_interest=Decimal("200.005"),
            principal_before=Decimal("36500"),
            principal_after=Decimal("36200.005"),
            interest_before=Decimal("200.005"),
            interest_after=Decimal("0"),
            total_before=Decimal("36700.005"),
            total_after=Decimal("36200.005"),
            daily_interest_before=Decimal("10"),
            daily_interest_after=Decimal("9.917808"),
        )

        dto = PaymentMapper.to_impact_response(impact)

        assert dto.payment_amount == "500.00"
        assert dto.applied_to_principal == "300.00"
        assert dto.applied_to_interest == "200.01"
        assert dto.principal_after == "36200.01"
        assert dto.principal_change == "-300.00"
        assert dto.interest_change == "-200.01"
        assert dto.total_change == "-500.00"
        assert dto.daily_interest_after == "9.92"
        assert dto.daily_interest_change == "-0.08"


# ==============================================================================
# LedgerIOMapper
# ==============================================================================


class TestLedgerIOMapper:
    def test_to_preview(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        imported = ImportedLoan(
            borrower_name="Sam Lee",
            start_date=start,
            annual_interest_rate=Decimal("0.06"),
            entries=[
                LedgerEntry(date=start, entry_type=CapitalAddition(Decimal("5000"))),
                LedgerEntry(date=start + timedelta(days=31), entry_type=CapitalAddition(Decimal("1000"))),
                LedgerEntry(
                    date=start + timedelta(days=60),
                    entry_type=Payment(Decimal("200"), Decimal("50.5")),
                ),
            ],
        )

        dto = LedgerIOMapper.to_preview(imported)

        assert dto.borrower_name == "Sam Lee"
        assert dto.start_date == start
        assert dto.annual_interest_rate == "0.06"
        assert dto.entry_count == 3
        assert dto.total_investments == "6000.00"
        assert dto.total_payments == "250.50"
