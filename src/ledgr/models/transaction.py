"""Expense and income entries."""

from __future__ import annotations

from typing import Optional

from sqlmodel import SQLModel

from .account import BankAccount, FundSource
from .base import IsoDate, Money, ZERO
from .category import Category
from .funding import FundingRef, funding_from_relations
from .loan import Loan


class LedgerEntry(SQLModel):
    """Common shape of a dated, categorized money movement."""

    id: int
    amount: Money = ZERO
    description: Optional[str] = None
    date: IsoDate = None
    category: Optional[Category] = None
    bank_account: Optional[BankAccount] = None
    fund_source: Optional[FundSource] = None

    @property
    def funding(self) -> Optional[FundingRef]:
        return funding_from_relations(self.bank_account, self.fund_source)

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else "Uncategorized"


class Expense(LedgerEntry):
    """Money out, paid from a bank account, a cash fund or a loan."""

    loan: Optional[Loan] = None

    @property
    def funding(self) -> Optional[FundingRef]:
        return funding_from_relations(self.bank_account, self.fund_source, self.loan)


class Income(LedgerEntry):
    """Money in, credited to a bank account or a cash fund."""
