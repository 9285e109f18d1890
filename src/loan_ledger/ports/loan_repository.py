from __future__ import annotations

from abc import ABC, abstractmethod

from loan_ledger.domain.loan import Loan


class LoanRepository(ABC):
    """
    Port for loan storage.

    A Loan is stored together with its ledger; there is no separate entry
    store. Deleting a loan therefore deletes its entries.

    Contract:
        - ``get`` and ``list_all`` return snapshots. Mutating a returned Loan has
          no effect on the store until it is passed to ``save``.
        - ``save`` replaces the stored loan (and its whole ledger) with the
          given one, inserting it if absent.
        - Inputs are pre-validated by the caller (UseCase).
    """

    @abstractmethod
    def save(self, loan: Loan) -> None: ...

    @abstractmethod
    def get(self, loan_id: str) -> Loan | None: ...

    @abstractmethod
    def list_all(self) -> list[Loan]:
        """All loans, most recently created first."""
        ...

    @abstractmethod
    def delete(self, loan_id: str) -> bool:
        """Remove a loan and its ledger. Returns False if it did not exist."""
        ...

    @abstractmethod
    def find_by_borrower_name(self, borrower_name: str) -> Loan | None: ...

    @abstractmethod
    def add_if_borrower_absent(self, loan: Loan) -> bool:
        """
        Insert ``loan`` unless a loan with the same borrower name is stored.

        The check and the insert are one atomic step. Returns False, storing
        nothing, when the name is taken.
        """
        ...
