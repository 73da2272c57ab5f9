"""Loans and their repayments."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel

from .base import IsoDate, Money, ZERO

LOAN_STATUSES = ("unpaid", "partially_paid", "paid")


class Loan(SQLModel):
    """Money borrowed from a lender; the server decrements the balance on repay."""

    id: int
    lender_name: str = ""
    amount: Money = ZERO
    balance_remaining: Money = ZERO
    status: str = "unpaid"
    due_date: IsoDate = None
    description: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status in {"unpaid", "partially_paid"}

    @property
    def paid_amount(self) -> Decimal:
        return max(Decimal("0"), self.amount - self.balance_remaining)

    @property
    def progress_percent(self) -> float:
        if self.amount <= 0:
            return 0.0
        return float(self.paid_amount / self.amount * 100)


class LoanRepayment(SQLModel):
    id: int
    amount: Money = ZERO
    date: IsoDate = None
    notes: Optional[str] = None


class LoanStats(SQLModel):
    """Authoritative totals from ``/loans-stats``."""

    total_borrowed: Money = ZERO
    total_remaining: Money = ZERO
    total_paid: Money = ZERO
    active_count: int = 0
    paid_count: int = 0
