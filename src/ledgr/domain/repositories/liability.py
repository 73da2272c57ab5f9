"""Loan and installment repository protocols."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from ...models.installment import Installment
from ...models.loan import Loan, LoanRepayment, LoanStats
from .resource import ResourceRepository


class LoanRepository(ResourceRepository[Loan], Protocol):
    """Loans plus their repayment history."""

    def stats(self) -> LoanStats:
        """Authoritative totals across every loan."""
        ...

    def repayments(self, loan_id: int) -> list[LoanRepayment]:
        """List repayments recorded against a loan."""
        ...

    def repay(self, loan_id: int, payload: Mapping[str, Any]) -> Any:
        """Record a repayment; the server adjusts the balance."""
        ...


class InstallmentRepository(ResourceRepository[Installment], Protocol):
    """Installment plans."""

    def pay(self, installment_id: int, months: int = 1) -> Any:
        """Mark ``months`` installments as paid."""
        ...
