"""CSV interchange format for a single loan and its ledger.

Layout::

    Loan Export: <borrower name>
    Start Date: <yyyy-MM-dd>
    Interest Rate: <rate * 100, 2 decimals>%
    <blank line>
    Date,Type,Amount,Principal Paid,Interest Paid,Notes
    <row>*

The codec works on in-memory text only. Reading and writing files is left
to the caller.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from loan_ledger.domain.entries import CapitalAddition, LedgerEntry, Payment
from loan_ledger.domain.errors import DomainError
from loan_ledger.domain.loan import Loan
from loan_ledger.domain.payments import IMPORT_SPLIT_TOLERANCE, split_matches

logger = logging.getLogger(__name__)


BORROWER_PREFIX = "Loan Export:"
START_DATE_PREFIX = "Start Date:"
RATE_PREFIX = "Interest Rate:"
COLUMN_HEADER = "Date,Type,Amount,Principal Paid,Interest Paid,Notes"
COLUMN_COUNT = 6

INVESTMENT_TAG = "Investment"
PAYMENT_TAG = "Payment"

# Header lines plus the column header; an export with an empty ledger has exactly these.
MIN_LINES = 4

DATE_FORMATS = (
    "%b %d, %Y",  # Jan 26, 2015
    "%b %d,%Y",  # Jan 26,2015
    "%m/%d/%Y",  # 1/26/2015, 01/26/2015
    "%Y-%m-%d",  # 2015-01-26
)

CENT = Decimal("0.01")
HUNDRED = Decimal(100)


# ==============================================================================
# Import errors
# ==============================================================================


class LedgerImportError(DomainError):
    """Base class for CSV import failures. The whole import is rejected."""

    error_code: str = "IMPORT_ERROR"


class InvalidFormatError(LedgerImportError):
    error_code: str = "INVALID_FORMAT"

    def __init__(self, **context: Any) -> None:
        super().__init__("This file doesn't match the loan export format", **context)


class MissingHeaderError(LedgerImportError):
    error_code: str = "MISSING_HEADER"

    def __init__(self, **context: Any) -> None:
        super().__init__("CSV header row is missing or invalid", **context)


class InvalidLoanInfoError(LedgerImportError):
    error_code: str = "INVALID_LOAN_INFO"

    def __init__(self, **context: Any) -> None:
        super().__init__("Unable to read loan information from file", **context)


class InvalidTransactionError(LedgerImportError):
    error_code: str = "INVALID_TRANSACTION"

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(
            f"Invalid transaction on line {line_number}: {reason}",
            line_number=line_number,
            reason=reason,
        )


class EmptyInputError(LedgerImportError):
    error_code: str = "EMPTY_INPUT"

    def __init__(self, **context: Any) -> None:
        super().__init__("The CSV file is empty", **context)


# ==============================================================================
# Imported loan
# ==============================================================================


@dataclass(frozen=True, slots=True)
class ImportedLoan:
    """A parsed export, not yet attached to any store."""

    borrower_name: str
    start_date: datetime
    annual_interest_rate: Decimal
    entries: list[LedgerEntry] = field(default_factory=list)

    @property
    def total_investments(self) -> Decimal:
        return sum(
            (e.entry_type.amount for e in self.entries if isinstance(e.entry_type, CapitalAddition)),
            Decimal(0),
        )

    @property
    def total_payments(self) -> Decimal:
        return sum(
            (e.entry_type.total_amount for e in self.entries if isinstance(e.entry_type, Payment)),
            Decimal(0),
        )

    def to_loan(self, created_at: datetime | None = None) -> Loan:
        loan = Loan(
            borrower_name=self.borrower_name,
            start_date=self.start_date,
            annual_interest_rate=self.annual_interest_rate,
        )
        if created_at is not None:
            loan.created_at = created_at
        for entry in self.entries:
            loan.add_entry(entry)
        return loan


# ==============================================================================
# Export
# ==============================================================================


def export_ledger(loan: Loan) -> str:
    """Serialize ``loan`` to the interchange text, ledger in chronological order."""
    out = io.StringIO()
    out.write(f"{BORROWER_PREFIX} {loan.borrower_name}\n")
    out.write(f"{START_DATE_PREFIX} {format_date(loan.start_date)}\n")
    out.write(f"{RATE_PREFIX} {format_money(loan.annual_interest_rate * HUNDRED)}%\n")
    out.write("\n")
    out.write(f"{COLUMN_HEADER}\n")

    writer = csv.writer(out, lineterminator="\n")
    for entry in loan.chronological_ledger():
        writer.writerow(_export_row(entry))

    logger.debug("Exported ledger", extra={"loan_id": loan.id, "rows": len(loan.ledger)})
    return out.getvalue()


def _export_row(entry: LedgerEntry) -> list[str]:
    notes = " ".join(entry.notes.split())
    entry_type = entry.entry_type
    if isinstance(entry_type, CapitalAddition):
        return [
            format_date(entry.date),
            INVESTMENT_TAG,
            format_money(entry_type.amount),
            "",
            "",
            notes,
        ]
    total, principal, interest = _cent_split(entry_type)
    return [format_date(entry.date), PAYMENT_TAG, str(total), str(principal), str(interest), notes]


def _cent_split(payment: Payment) -> tuple[Decimal, Decimal, Decimal]:
    """Round a payment to cents so that principal plus interest equals the total exactly."""
    total = _to_cents(payment.total_amount)
    interest = _to_cents(payment.to_interest)
    return total, total - interest, interest


def format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def format_money(value: Decimal) -> str:
    return str(_to_cents(value))


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# ==============================================================================
# Import
# ==============================================================================


def import_ledger(text: str) -> ImportedLoan:
    """
    Parse the interchange text.

    Blank lines are ignored. Row errors cite the 1-based line number in
    ``text``. The first failure aborts the whole import.

    Raises:
        EmptyInputError: Fewer than the header lines are present
        InvalidFormatError: First line is not a loan export title
        InvalidLoanInfoError: Borrower, start date or rate unreadable
        MissingHeaderError: Column header row absent or different
        InvalidTransactionError: A ledger row failed to parse or validate
    """
    lines = [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if len(lines) < MIN_LINES:
        raise EmptyInputError()

    borrower_name = _parse_borrower(lines[0][1])
    start_date = _parse_start_date(lines[1][1])
    annual_rate = _parse_rate(lines[2][1])

    if lines[3][1] != COLUMN_HEADER:
        raise MissingHeaderError(line_number=lines[3][0])

    entries = [_parse_row(line, line_number) for line_number, line in lines[4:]]

    logger.debug("Parsed ledger import", extra={"borrower_name": borrower_name, "rows": len(entries)})
    return ImportedLoan(
        borrower_name=borrower_name,
        start_date=start_date,
        annual_interest_rate=annual_rate,
        entries=entries,
    )


def _parse_borrower(line: str) -> str:
    if not line.startswith(BORROWER_PREFIX):
        raise InvalidFormatError()
    borrower_name = line[len(BORROWER_PREFIX):].strip()
    if not borrower_name:
        raise InvalidLoanInfoError(field="borrower_name")
    return borrower_name


def _parse_start_date(line: str) -> datetime:
    if not line.startswith(START_DATE_PREFIX):
        raise InvalidLoanInfoError(field="start_date")
    start_date = parse_date(line[len(START_DATE_PREFIX):].strip())
    if start_date is None:
        raise InvalidLoanInfoError(field="start_date")
    return start_date


def _parse_rate(line: str) -> Decimal:
    if not line.startswith(RATE_PREFIX):
        raise InvalidLoanInfoError(field="annual_interest_rate")
    rate_text = line[len(RATE_PREFIX):].strip()
    if not rate_text.endswith("%"):
        raise InvalidLoanInfoError(field="annual_interest_rate")
    percent = parse_decimal(rate_text[:-1])
    if percent is None or percent < 0:
        raise InvalidLoanInfoError(field="annual_interest_rate")
    return percent / HUNDRED


def _parse_row(line: str, line_number: int) -> LedgerEntry:
    try:
        fields = [value.strip() for value in next(csv.reader([line]))]
    except csv.Error as exc:
        raise InvalidTransactionError(line_number, f"Unreadable row: {exc}") from exc

    if len(fields) < COLUMN_COUNT:
        raise InvalidTransactionError(line_number, "Incorrect number of columns")

    # Unquoted commas in notes from older exports spill into extra fields.
    date_text, type_tag, amount_text, principal_text, interest_text = fields[:5]
    notes = ",".join(fields[5:])

    entry_date = parse_date(date_text)
    if entry_date is None:
        raise InvalidTransactionError(line_number, f"Invalid date format: '{date_text}'")

    if type_tag == INVESTMENT_TAG:
        amount = parse_decimal(amount_text)
        if amount is None:
            raise InvalidTransactionError(line_number, "Invalid amount")
        return LedgerEntry(date=entry_date, entry_type=CapitalAddition(amount=amount), notes=notes)

    if type_tag == PAYMENT_TAG:
        amount = parse_decimal(amount_text)
        principal = parse_decimal(principal_text)
        interest = parse_decimal(interest_text)
        if amount is None or principal is None or interest is None:
            raise InvalidTransactionError(line_number, "Invalid payment amounts")
        if principal < 0 or interest < 0:
            raise InvalidTransactionError(line_number, "Payment amounts cannot be negative")
        if not split_matches(amount, principal, interest, IMPORT_SPLIT_TOLERANCE):
            raise InvalidTransactionError(
                line_number, "Payment total doesn't match principal + interest"
            )
        return LedgerEntry(
            date=entry_date,
            entry_type=Payment(to_principal=principal, to_interest=interest),
            notes=notes,
        )

    raise InvalidTransactionError(line_number, f"Unknown transaction type: {type_tag}")


def parse_date(text: str) -> datetime | None:
    """Parse any accepted date spelling to midnight UTC, or None."""
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return _midnight_utc(parsed.date())
    return None


def _midnight_utc(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def parse_decimal(text: str) -> Decimal | None:
    cleaned = text.strip()
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value
