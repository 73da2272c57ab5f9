"""HTTP implementations of bank account and fund source repositories."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...api.client import ApiClient
from ...logging_config import get_logger
from ...models.account import BankAccount, FundSource
from .base import HttpResourceRepository

logger = get_logger(__name__)


class HttpBankAccountRepository(HttpResourceRepository[BankAccount]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "bank-accounts", BankAccount, per_page=per_page)


class HttpFundSourceRepository(HttpResourceRepository[FundSource]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "fund-sources", FundSource, per_page=per_page)

    def withdraw(self, bank_account_id: int, amount: Decimal) -> Any:
        """Move cash out of a bank account into the cash fund."""
        body = self.client.post(
            f"{self.path}/withdraw",
            {"bank_account_id": int(bank_account_id), "amount": float(amount)},
        )
        logger.info("Cash withdrawn", extra={"bank_account_id": bank_account_id})
        return body
