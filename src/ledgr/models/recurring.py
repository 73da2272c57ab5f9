"""Recurring transactions (subscriptions and bills)."""

from __future__ import annotations

from typing import Optional

from sqlmodel import SQLModel

from .account import BankAccount, FundSource
from .base import IsoDate, Money, ZERO
from .category import Category
from .funding import FundingRef, funding_from_relations

FREQUENCIES = ("daily", "weekly", "monthly", "yearly")


class RecurringTransaction(SQLModel):
    id: int
    name: str = ""
    description: Optional[str] = None
    amount: Money = ZERO
    frequency: str = "monthly"
    next_due_date: IsoDate = None
    last_processed_date: IsoDate = None
    is_active: bool = True
    notify_3_days_before: bool = True
    category: Optional[Category] = None
    bank_account: Optional[BankAccount] = None
    fund_source: Optional[FundSource] = None
    start_date: IsoDate = None
    end_date: IsoDate = None

    @property
    def funding(self) -> Optional[FundingRef]:
        return funding_from_relations(self.bank_account, self.fund_source)
