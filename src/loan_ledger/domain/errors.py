"""Errors raised by the loan ledger.

Nothing here knows about HTTP. Each error exposes a stable ``error_code``;
the entrypoints decide which status code that becomes.
"""

from __future__ import annotations

from typing import Any, TypedDict


class FieldError(TypedDict):
    """One failing input field, as reported to callers."""

    field: str
    message: str
    code: str


def field_error(field: str, message: str, code: str) -> FieldError:
    return {"field": field, "message": message, "code": code}


class DomainError(Exception):
    """Root of the ledger error tree.

    ``context`` keeps structured details (loan id, CSV line number, ...)
    that are merged into :meth:`to_dict`.
    """

    # Stable, machine-readable; safe to use as an i18n key
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def details(self) -> dict[str, Any]:
        """Everything serialized besides the message and code."""
        return dict(self.context)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.details()}


class ValidationError(DomainError):
    """A change that may not be applied to a ledger.

    Carries one :class:`FieldError` per failing field so every problem with a
    request is reported at once, e.g. a non-positive amount together with a
    date before the loan start.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[FieldError] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    @classmethod
    def for_field(cls, field: str, message: str, code: str) -> ValidationError:
        return cls(errors=[field_error(field, message, code)])

    def details(self) -> dict[str, Any]:
        details = super().details()
        if self.errors:
            details["errors"] = self.errors
        return details


class NotFoundError(DomainError):
    """Unknown loan or ledger entry id."""

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, resource=resource, identifier=identifier, **context)

    @classmethod
    def loan(cls, loan_id: str) -> NotFoundError:
        return cls("Loan", loan_id)

    @classmethod
    def entry(cls, loan_id: str, entry_id: str) -> NotFoundError:
        return cls("LedgerEntry", entry_id, loan_id=loan_id)


class ConflictError(DomainError):
    """The request clashes with a loan that already exists."""

    error_code: str = "CONFLICT"

    @classmethod
    def duplicate_borrower(cls, borrower_name: str) -> ConflictError:
        return cls(
            f"A loan for {borrower_name} already exists. "
            "Please delete it first or rename the borrower in the CSV file.",
            borrower_name=borrower_name,
        )


class InternalError(DomainError):
    """Broken invariant inside the ledger. Always logged at ERROR."""

    error_code: str = "INTERNAL_ERROR"
