from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from loan_ledger.entrypoints.http.dtos.loans import MONEY_PATTERN


class PaymentDTO(BaseModel):
    """Request payload for previewing or logging a payment."""

    amount: str = Field(description="Total payment amount", examples=["500.00"], pattern=MONEY_PATTERN)
    strategy: Literal["interest_first", "principal_only", "custom"] = Field(
        default="interest_first",
        description="How the payment is split between interest and principal",
    )
    custom_principal: str | None = Field(
        default=None,
        description="Principal part (custom strategy only)",
        pattern=MONEY_PATTERN,
    )
    custom_interest: str | None = Field(
        default=None,
        description="Interest part (custom strategy only)",
        pattern=MONEY_PATTERN,
    )
    date: datetime | None = Field(default=None, description="Payment date; defaults to now")
    notes: str = Field(default="")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": "500.00",
                "strategy": "custom",
                "custom_principal": "300.00",
                "custom_interest": "200.00",
                "date": "2024-03-01T00:00:00Z",
                "notes": "First payment received",
            }
        }
    )


class PaymentImpactDTO(BaseModel):
    """Before/after effect of a payment."""

    payment_amount: str
    applied_to_principal: str
    applied_to_interest: str
    principal_before: str
    principal_after: str
    principal_change: str
    interest_before: str
    interest_after: str
    interest_change: str
    total_before: str
    total_after: str
    total_change: str
    daily_interest_before: str
    daily_interest_after: str
    daily_interest_change: str
