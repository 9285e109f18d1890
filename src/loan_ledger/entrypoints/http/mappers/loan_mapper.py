from __future__ import annotations

from datetime import datetime

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, LedgerEntryType, Payment
from loan_ledger.domain.errors import FieldError, ValidationError, field_error
from loan_ledger.domain.loan import Loan
from loan_ledger.entrypoints.http.dtos.loans import (
    BalancesDTO,
    CapitalDTO,
    CreateLoanDTO,
    EditEntryDTO,
    LedgerDTO,
    LedgerEntryDTO,
    LoanListDTO,
    LoanListItemDTO,
    LoanSummaryDTO,
    TaxSummaryDTO,
)
from loan_ledger.entrypoints.http.mappers.conversions import money, parse_decimal, to_utc
from loan_ledger.use_cases.add_capital import AddCapitalRequest
from loan_ledger.use_cases.create_loan import CreateLoanRequest
from loan_ledger.use_cases.edit_ledger_entry import EditLedgerEntryRequest
from loan_ledger.use_cases.get_loan_summary import LoanSummary


class LoanMapper:
    """Maps between REST DTOs and domain models for loans and ledger entries."""

    @staticmethod
    def to_create_request(dto: CreateLoanDTO, now: datetime) -> CreateLoanRequest:
        """
        Converts the create payload to a domain request.

        Raises:
            ValidationError: If decimal strings cannot be converted
        """
        errors: list[FieldError] = []
        rate = parse_decimal("annual_interest_rate", dto.annual_interest_rate, errors)
        initial_amount = None
        if dto.initial_amount is not None:
            initial_amount = parse_decimal("initial_amount", dto.initial_amount, errors)

        if errors:
            raise ValidationError(errors=errors)

        return CreateLoanRequest(
            borrower_name=dto.borrower_name,
            start_date=to_utc(dto.start_date),
            annual_interest_rate=rate,
            initial_amount=initial_amount,
            notes=dto.notes,
            now=now,
        )

    @staticmethod
    def to_capital_request(loan_id: str, dto: CapitalDTO, now: datetime) -> AddCapitalRequest:
        errors: list[FieldError] = []
        amount = parse_decimal("amount", dto.amount, errors)
        if errors:
            raise ValidationError(errors=errors)

        return AddCapitalRequest(
            loan_id=loan_id,
            amount=amount,
            date=to_utc(dto.date) if dto.date is not None else now,
            notes=dto.notes,
            now=now,
        )

    @staticmethod
    def to_edit_request(
        loan_id: str, entry_id: str, dto: EditEntryDTO, now: datetime
    ) -> EditLedgerEntryRequest:
        """
        Converts the edit payload to a domain request.

        Investment entries need ``amount``; Payment entries need both
        ``principal_paid`` and ``interest_paid``.
        """
        errors: list[FieldError] = []
        entry_type: LedgerEntryType

        if dto.type == "Investment":
            if dto.amount is None:
                raise ValidationError.for_field("amount", "Required for Investment", "REQUIRED")
            entry_type = CapitalAddition(amount=parse_decimal("amount", dto.amount, errors))
        else:
            missing = [
                field_error(name, "Required for Payment", "REQUIRED")
                for name, value in (
                    ("principal_paid", dto.principal_paid),
                    ("interest_paid", dto.interest_paid),
                )
                if value is None
            ]
            if missing:
                raise ValidationError(errors=missing)
            entry_type = Payment(
                to_principal=parse_decimal("principal_paid", dto.principal_paid or "", errors),
                to_interest=parse_decimal("interest_paid", dto.interest_paid or "", errors),
            )

        if errors:
            raise ValidationError(errors=errors)

        return EditLedgerEntryRequest(
            loan_id=loan_id,
            entry_id=entry_id,
            date=to_utc(dto.date),
            entry_type=entry_type,
            notes=dto.notes,
            now=now,
        )

    @staticmethod
    def entry_to_dto(entry: LedgerEntry) -> LedgerEntryDTO:
        entry_type = entry.entry_type
        principal_paid = None
        interest_paid = None
        if isinstance(entry_type, Payment):
            principal_paid = money(entry_type.to_principal)
            interest_paid = money(entry_type.to_interest)

        return LedgerEntryDTO(
            id=entry.id,
            loan_id=entry.loan_id,
            date=entry.date,
            type=entry_type.display_name,
            amount=money(entry.amount),
            principal_paid=principal_paid,
            interest_paid=interest_paid,
            notes=entry.notes,
            description=entry.description,
        )

    @staticmethod
    def to_ledger(loan: Loan) -> LedgerDTO:
        return LedgerDTO(
            loan_id=loan.id,
            entries=[LoanMapper.entry_to_dto(entry) for entry in loan.sorted_ledger()],
        )

    @staticmethod
    def to_summary(summary: LoanSummary) -> LoanSummaryDTO:
        """
        Converts a computed summary to the response DTO.

        Args:
            summary: Balances and totals from GetLoanSummary

        Returns:
            LoanSummaryDTO with every amount rounded half-up to cents
        """
        loan = summary.loan
        balances = summary.balances
        return LoanSummaryDTO(
            id=loan.id,
            borrower_name=loan.borrower_name,
            start_date=loan.start_date,
            annual_interest_rate=str(loan.annual_interest_rate),
            notes=loan.notes,
            created_at=loan.created_at,
            as_of=summary.as_of,
            balances=BalancesDTO(
                principal=money(balances.principal),
                accrued_interest=money(balances.accrued_interest),
                total_owed=money(balances.total_owed),
                daily_interest=money(balances.daily_interest),
            ),
            tax_summary=TaxSummaryDTO(
                lifetime_interest_paid=money(summary.lifetime_interest_paid),
                lifetime_principal_paid=money(summary.lifetime_principal_paid),
                total_invested=money(summary.total_invested),
            ),
            ledger=[LoanMapper.entry_to_dto(entry) for entry in summary.ledger],
        )

    @staticmethod
    def to_list(loans: list[Loan], as_of: datetime) -> LoanListDTO:
        return LoanListDTO(
            as_of=as_of,
            loans=[
                LoanListItemDTO(
                    id=loan.id,
                    borrower_name=loan.borrower_name,
                    start_date=loan.start_date,
                    annual_interest_rate=str(loan.annual_interest_rate),
                    created_at=loan.created_at,
                    entry_count=len(loan.ledger),
                    principal=money(loan.current_principal()),
                    total_owed=money(loan.total_owed(as_of)),
                )
                for loan in loans
            ],
        )
