from __future__ import annotations

from datetime import datetime

from loan_ledger.domain.errors import FieldError, ValidationError, field_error
from loan_ledger.domain.payments import (
    Custom,
    InterestFirst,
    PaymentImpact,
    PaymentStrategy,
    PrincipalOnly,
)
from loan_ledger.entrypoints.http.dtos.payments import PaymentDTO, PaymentImpactDTO
from loan_ledger.entrypoints.http.mappers.conversions import money, parse_decimal, to_utc
from loan_ledger.use_cases.preview_payment import PaymentRequest


class PaymentMapper:
    """Maps between REST DTOs and domain models for payments."""

    @staticmethod
    def to_domain_request(loan_id: str, dto: PaymentDTO, now: datetime) -> PaymentRequest:
        """
        Converts the payment payload to a domain request.

        The custom strategy needs both ``custom_principal`` and
        ``custom_interest``; they are ignored for the other strategies.

        Args:
            loan_id: Path parameter identifying the loan
            dto: Validated payment payload
            now: Request time; used as the payment date when none is given

        Returns:
            PaymentRequest shared by the preview and commit use cases

        Raises:
            ValidationError: If decimal strings cannot be converted or custom parts are missing
        """
        errors: list[FieldError] = []
        amount = parse_decimal("amount", dto.amount, errors)

        strategy: PaymentStrategy
        if dto.strategy == "principal_only":
            strategy = PrincipalOnly()
        elif dto.strategy == "custom":
            for name, value in (
                ("custom_principal", dto.custom_principal),
                ("custom_interest", dto.custom_interest),
            ):
                if value is None:
                    errors.append(field_error(name, "Required for custom strategy", "REQUIRED"))
            strategy = Custom(
                principal=parse_decimal("custom_principal", dto.custom_principal or "0", errors),
                interest=parse_decimal("custom_interest", dto.custom_interest or "0", errors),
            )
        else:
            strategy = InterestFirst()

        if errors:
            raise ValidationError(errors=errors)

        return PaymentRequest(
            loan_id=loan_id,
            amount=amount,
            strategy=strategy,
            date=to_utc(dto.date) if dto.date is not None else now,
            notes=dto.notes,
            now=now,
        )

    @staticmethod
    def to_impact_response(impact: PaymentImpact) -> PaymentImpactDTO:
        return PaymentImpactDTO(
            payment_amount=money(impact.payment_amount),
            applied_to_principal=money(impact.applied_to_principal),
            applied_to_interest=money(impact.applied_to_interest),
            principal_before=money(impact.principal_before),
            principal_after=money(impact.principal_after),
            principal_change=money(impact.principal_change),
            interest_before=money(impact.interest_before),
            interest_after=money(impact.interest_after),
            interest_change=money(impact.interest_change),
            total_before=money(impact.total_before),
            total_after=money(impact.total_after),
            total_change=money(impact.total_change),
            daily_interest_before=money(impact.daily_interest_before),
            daily_interest_after=money(impact.daily_interest_after),
            daily_interest_change=money(impact.daily_interest_change),
        )
