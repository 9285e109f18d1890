from __future__ import annotations

import copy
import threading

from loan_ledger.domain.loan import Loan
from loan_ledger.ports.loan_repository import LoanRepository


class InMemoryLoanRepository(LoanRepository):
    """
    Canonical contract implementation, also used by the HTTP app.

    - Keeps loans in a dict keyed by id, guarded by a lock
    - Stores and returns deep copies, so every caller works on its own
      snapshot and the engine never sees a ledger change mid-computation
    - Concurrent saves of the same loan: last writer wins
    """

    def __init__(self, loans: list[Loan] | None = None) -> None:
        self._lock = threading.Lock()
        self._loans: dict[str, Loan] = {}
        for loan in loans or []:
            self._loans[loan.id] = copy.deepcopy(loan)

    def save(self, loan: Loan) -> None:
        snapshot = copy.deepcopy(loan)
        with self._lock:
            self._loans[loan.id] = snapshot

    def get(self, loan_id: str) -> Loan | None:
        with self._lock:
            loan = self._loans.get(loan_id)
            return copy.deepcopy(loan) if loan is not None else None

    def list_all(self) -> list[Loan]:
        with self._lock:
            loans = copy.deepcopy(list(self._loans.values()))
        return sorted(loans, key=lambda loan: loan.created_at, reverse=True)

    def delete(self, loan_id: str) -> bool:
        with self._lock:
            return self._loans.pop(loan_id, None) is not None

    def find_by_borrower_name(self, borrower_name: str) -> Loan | None:
        with self._lock:
            loan = self._find_by_borrower_name(borrower_name)
            return copy.deepcopy(loan) if loan is not None else None

    def add_if_borrower_absent(self, loan: Loan) -> bool:
        snapshot = copy.deepcopy(loan)
        with self._lock:
            if self._find_by_borrower_name(loan.borrower_name) is not None:
                return False
            self._loans[loan.id] = snapshot
            return True

    def _find_by_borrower_name(self, borrower_name: str) -> Loan | None:
        # Caller holds the lock.
        for loan in self._loans.values():
            if loan.borrower_name == borrower_name:
                return loan
        return None
