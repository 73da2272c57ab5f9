"""HTTP implementations of loan and installment repositories."""

from __future__ import annotations

from typing import Any, Mapping

from ...api.client import ApiClient
from ...api.envelope import normalize_list, unwrap
from ...logging_config import get_logger
from ...models.installment import Installment
from ...models.loan import Loan, LoanRepayment, LoanStats
from .base import HttpResourceRepository

logger = get_logger(__name__)


class HttpLoanRepository(HttpResourceRepository[Loan]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "loans", Loan, per_page=per_page)

    def stats(self) -> LoanStats:
        data = unwrap(self.client.get("/loans-stats"))
        return LoanStats.model_validate(data if isinstance(data, Mapping) else {})

    def repayments(self, loan_id: int) -> list[LoanRepayment]:
        body = self.client.get(self.item_path(loan_id, "repayments"))
        return normalize_list(body, LoanRepayment.model_validate).items

    def repay(self, loan_id: int, payload: Mapping[str, Any]) -> Any:
        body = self.client.post(self.item_path(loan_id, "repay"), dict(payload))
        logger.info("Loan repayment recorded", extra={"loan_id": loan_id})
        return body


class HttpInstallmentRepository(HttpResourceRepository[Installment]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "installments", Installment, per_page=per_page)

    def pay(self, installment_id: int, months: int = 1) -> Any:
        if months < 1:
            raise ValueError("months must be at least 1")
        body = self.client.post(self.item_path(installment_id, "pay"), {"months_to_pay": months})
        logger.info("Installment paid", extra={"installment_id": installment_id, "months": months})
        return body
