"""Bank account and fund source repository protocols."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol

from ...models.account import BankAccount, FundSource
from .resource import ResourceRepository


class BankAccountRepository(ResourceRepository[BankAccount], Protocol):
    """Bank accounts; balances are maintained by the server."""


class FundSourceRepository(ResourceRepository[FundSource], Protocol):
    """Cash funds."""

    def withdraw(self, bank_account_id: int, amount: Decimal) -> Any:
        """Move cash out of a bank account into the cash fund."""
        ...
