from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"
RATE_PATTERN = r"^-?\d+(\.\d+)?$"


class CreateLoanDTO(BaseModel):
    """Request payload for opening a loan."""

    borrower_name: str = Field(
        description="Name of the borrower or company",
        examples=["Alex Johnson"],
        min_length=1,
    )
    start_date: datetime = Field(
        description="Date the loan started (ISO 8601; naive values are read as UTC)",
        examples=["2024-01-01T00:00:00Z"],
    )
    annual_interest_rate: str = Field(
        description="Annual rate as a decimal fraction string ('0.08' = 8%)",
        examples=["0.08"],
        pattern=RATE_PATTERN,
    )
    initial_amount: str | None = Field(
        default=None,
        description="Optional first investment, recorded on the start date",
        examples=["10000.00"],
        pattern=MONEY_PATTERN,
    )
    notes: str = Field(default="", description="Free-text notes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "borrower_name": "Alex Johnson",
                "start_date": "2024-01-01T00:00:00Z",
                "annual_interest_rate": "0.08",
                "initial_amount": "10000.00",
                "notes": "",
            }
        }
    )


class CapitalDTO(BaseModel):
    """Request payload for adding capital to a loan."""

    amount: str = Field(description="Amount invested", examples=["2500.00"], pattern=MONEY_PATTERN)
    date: datetime | None = Field(default=None, description="Entry date; defaults to now")
    notes: str = Field(default="")


class EditEntryDTO(BaseModel):
    """Request payload for correcting a ledger entry."""

    type: str = Field(description="'Investment' or 'Payment'", pattern=r"^(Investment|Payment)$")
    date: datetime
    amount: str | None = Field(
        default=None,
        description="Investment amount (Investment entries only)",
        pattern=MONEY_PATTERN,
    )
    principal_paid: str | None = Field(
        default=None,
        description="Amount applied to principal (Payment entries only)",
        pattern=MONEY_PATTERN,
    )
    interest_paid: str | None = Field(
        default=None,
        description="Amount applied to interest (Payment entries only)",
        pattern=MONEY_PATTERN,
    )
    notes: str = Field(default="")


class LedgerEntryDTO(BaseModel):
    id: str
    loan_id: str | None
    date: datetime
    type: str = Field(description="'Investment' or 'Payment'")
    amount: str
    principal_paid: str | None = None
    interest_paid: str | None = None
    notes: str
    description: str = Field(examples=["-350.00 (Split)"])


class BalancesDTO(BaseModel):
    principal: str = Field(examples=["10000.00"])
    accrued_interest: str = Field(examples=["164.38"])
    total_owed: str = Field(examples=["10164.38"])
    daily_interest: str = Field(examples=["2.74"])


class TaxSummaryDTO(BaseModel):
    lifetime_interest_paid: str = Field(description="Interest received (taxable)")
    lifetime_principal_paid: str = Field(description="Principal received back")
    total_invested: str


class LoanSummaryDTO(BaseModel):
    """A loan with its balances as of a moment, tax totals and display-ordered ledger."""

    id: str
    borrower_name: str
    start_date: datetime
    annual_interest_rate: str
    notes: str
    created_at: datetime
    as_of: datetime
    balances: BalancesDTO
    tax_summary: TaxSummaryDTO
    ledger: list[LedgerEntryDTO]


class LoanListItemDTO(BaseModel):
    id: str
    borrower_name: str
    start_date: datetime
    annual_interest_rate: str
    created_at: datetime
    entry_count: int
    principal: str
    total_owed: str


class LoanListDTO(BaseModel):
    loans: list[LoanListItemDTO]
    as_of: datetime


class LedgerDTO(BaseModel):
    loan_id: str
    entries: list[LedgerEntryDTO] = Field(description="Most recent first")
