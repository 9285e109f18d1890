from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union


@dataclass(frozen=True, slots=True)
class CapitalAddition:
    """Money lent to the borrower; increases principal."""

    amount: Decimal

    @property
    def display_name(self) -> str:
        return "Investment"

    @property
    def total_amount(self) -> Decimal:
        return self.amount


@dataclass(frozen=True, slots=True)
class Payment:
    """Money received from the borrower, split between principal and interest."""

    to_principal: Decimal
    to_interest: Decimal

    @property
    def display_name(self) -> str:
        return "Payment"

    @property
    def total_amount(self) -> Decimal:
        return self.to_principal + self.to_interest


LedgerEntryType = Union[CapitalAddition, Payment]


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """
    A single transaction on a loan.

    The entry type is the only source of amounts: there is no separate
    discriminator field that could disagree with it. ``loan_id`` is a
    lookup-only back-reference; entries are owned by the Loan that stores them.
    """

    date: datetime
    entry_type: LedgerEntryType
    notes: str = ""
    id: str = field(default_factory=_new_id)
    loan_id: str | None = None

    @property
    def amount(self) -> Decimal:
        return self.entry_type.total_amount

    @property
    def is_payment(self) -> bool:
        return isinstance(self.entry_type, Payment)

    @property
    def description(self) -> str:
        """Short display text, e.g. ``+10000.00`` or ``-350.00 (Split)``."""
        entry_type = self.entry_type
        if isinstance(entry_type, CapitalAddition):
            return f"+{_money(entry_type.amount)}"

        if entry_type.to_principal > 0 and entry_type.to_interest > 0:
            return f"-{_money(entry_type.total_amount)} (Split)"
        if entry_type.to_principal > 0:
            return f"-{_money(entry_type.to_principal)} (Principal)"
        return f"-{_money(entry_type.to_interest)} (Interest)"


def _money(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
