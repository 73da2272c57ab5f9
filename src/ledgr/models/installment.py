"""Installment plans paid month by month."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel

from .account import BankAccount, FundSource
from .base import IsoDate, Money, ZERO
from .category import Category
from .funding import FundingRef, funding_from_relations


class Installment(SQLModel):
    id: int
    item_name: str = ""
    total_amount: Money = ZERO
    monthly_amount: Money = ZERO
    total_months: int = 0
    paid_months: int = 0
    status: str = "ongoing"
    start_date: IsoDate = None
    category: Optional[Category] = None
    bank_account: Optional[BankAccount] = None
    fund_source: Optional[FundSource] = None

    @property
    def funding(self) -> Optional[FundingRef]:
        return funding_from_relations(self.bank_account, self.fund_source)

    @property
    def remaining_months(self) -> int:
        return max(0, self.total_months - self.paid_months)

    @property
    def remaining_amount(self) -> Decimal:
        return self.monthly_amount * self.remaining_months

    @property
    def progress_percent(self) -> float:
        if self.total_months <= 0:
            return 0.0
        return min(100.0, self.paid_months / self.total_months * 100)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed" or self.remaining_months == 0
