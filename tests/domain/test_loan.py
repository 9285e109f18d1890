"""Tests for the Loan aggregate and ledger entries."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, Payment
from loan_ledger.domain.errors import NotFoundError
from loan_ledger.domain.loan import Loan


START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def day(n: int) -> datetime:
    return START + timedelta(days=n)


@pytest.fixture
def loan() -> Loan:
    loan = Loan(
        borrower_name="Jane Doe",
        start_date=START,
        annual_interest_rate=Decimal("0.08"),
    )
    loan.add_entry(
        LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("10000")), notes="Initial")
    )
    loan.add_entry(LedgerEntry(date=day(30), entry_type=CapitalAddition(Decimal("2500"))))
    loan.add_entry(
        LedgerEntry(
            date=day(60),
            entry_type=Payment(to_principal=Decimal("300"), to_interest=Decimal("200")),
        )
    )
    return loan


# ============================================================================
# Ledger entries
# ============================================================================


class TestLedgerEntry:
    def test_capital_addition_amount(self) -> None:
        entry = LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("100")))

        assert entry.amount == Decimal("100")
        assert entry.is_payment is False
        assert entry.entry_type.display_name == "Investment"

    def test_payment_amount_is_sum_of_parts(self) -> None:
        entry = LedgerEntry(date=START, entry_type=Payment(Decimal("300"), Decimal("50")))

        assert entry.amount == Decimal("350")
        assert entry.is_payment is True
        assert entry.entry_type.display_name == "Payment"

    def test_entries_get_unique_ids(self) -> None:
        first = LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("1")))
        second = LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("1")))

        assert first.id != second.id

    @pytest.mark.parametrize(
        "entry_type, expected",
        [
            (CapitalAddition(Decimal("10000")), "+10000.00"),
            (Payment(Decimal("300"), Decimal("50")), "-350.00 (Split)"),
            (Payment(Decimal("300"), Decimal("0")), "-300.00 (Principal)"),
            (Payment(Decimal("0"), Decimal("42.5")), "-42.50 (Interest)"),
        ],
    )
    def test_description(self, entry_type, expected: str) -> None:
        entry = LedgerEntry(date=START, entry_type=entry_type)

        assert entry.description == expected


# ============================================================================
# Derived balances
# ============================================================================


class TestBalances:
    def test_current_principal(self, loan: Loan) -> None:
        assert loan.current_principal() == Decimal("12200")

    def test_totals(self, loan: Loan) -> None:
        assert loan.total_invested() == Decimal("12500")
        assert loan.lifetime_principal_paid() == Decimal("300")
        assert loan.lifetime_interest_paid() == Decimal("200")

    def test_daily_interest_uses_current_principal(self, loan: Loan) -> None:
        assert loan.daily_interest_amount() == Decimal("12200") * Decimal("0.08") / Decimal(365)

    def test_total_owed_is_principal_plus_interest(self, loan: Loan) -> None:
        as_of = day(90)

        assert loan.total_owed(as_of) == loan.current_principal() + loan.accrued_interest(as_of)

    def test_empty_loan_has_zero_balances(self) -> None:
        loan = Loan(borrower_name="Empty", start_date=START, annual_interest_rate=Decimal("0.05"))

        assert loan.current_principal() == Decimal(0)
        assert loan.total_invested() == Decimal(0)
        assert loan.total_owed(day(10)) == Decimal(0)

    def test_principal_can_go_negative_when_overpaid(self) -> None:
        loan = Loan(borrower_name="Over", start_date=START, annual_interest_rate=Decimal("0.05"))
        loan.add_entry(LedgerEntry(date=START, entry_type=CapitalAddition(Decimal("100"))))
        loan.add_entry(LedgerEntry(date=day(1), entry_type=Payment(Decimal("150"), Decimal("0"))))

        assert loan.current_principal() == Decimal("-50")


# ============================================================================
# Ordering
# ============================================================================


class TestOrdering:
    def test_sorted_ledger_is_most_recent_first(self, loan: Loan) -> None:
        dates = [entry.date for entry in loan.sorted_ledger()]

        assert dates == [day(60), day(30), START]

    def test_same_date_last_inserted_comes_first(self, loan: Loan) -> None:
        later = loan.add_entry(
            LedgerEntry(date=day(60), entry_type=CapitalAddition(Decimal("1")), notes="later")
        )

        assert loan.sorted_ledger()[0] == later

    def test_chronological_ledger_is_ascending(self, loan: Loan) -> None:
        loan.add_entry(LedgerEntry(date=day(10), entry_type=CapitalAddition(Decimal("1"))))

        dates = [entry.date for entry in loan.chronological_ledger()]

        assert dates == sorted(dates)


# ============================================================================
# Structural changes
# ============================================================================


class TestStructuralChanges:
    def test_add_entry_stamps_loan_id(self, loan: Loan) -> None:
        entry = LedgerEntry(date=day(70), entry_type=CapitalAddition(Decimal("5")))

        owned = loan.add_entry(entry)

        assert owned.loan_id == loan.id
        assert owned.id == entry.id
        assert loan.get_entry(entry.id) == owned

    def test_get_entry_returns_none_when_missing(self, loan: Loan) -> None:
        assert loan.get_entry("missing") is None

    def test_replace_entry_keeps_id_and_position(self, loan: Loan) -> None:
        target = loan.ledger[1]

        edited = loan.replace_entry(
            target.id,
            date=day(31),
            entry_type=CapitalAddition(Decimal("3000")),
            notes="corrected",
        )

        assert loan.ledger[1] == edited
        assert edited.id == target.id
        assert edited.notes == "corrected"
        assert loan.current_principal() == Decimal("12700")

    def test_replace_entry_can_change_type(self, loan: Loan) -> None:
        target = loan.ledger[1]

        edited = loan.replace_entry(
            target.id,
            date=target.date,
            entry_type=Payment(Decimal("100"), Decimal("0")),
            notes="",
        )

        assert edited.is_payment is True
        assert loan.current_principal() == Decimal("9600")

    def test_remove_entry(self, loan: Loan) -> None:
        target = loan.ledger[2]

        removed = loan.remove_entry(target.id)

        assert removed == target
        assert len(loan.ledger) == 2
        assert loan.current_principal() == Decimal("12500")

    def test_missing_entry_raises_not_found(self, loan: Loan) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            loan.remove_entry("missing")

        assert exc_info.value.context["resource"] == "LedgerEntry"
        assert exc_info.value.context["loan_id"] == loan.id
