"""Concrete repository implementations over the REST API."""

from .account import HttpBankAccountRepository, HttpFundSourceRepository
from .base import HttpResourceRepository
from .budget import HttpBudgetRepository
from .category import HttpCategoryRepository, ensure_user_owned
from .liability import HttpInstallmentRepository, HttpLoanRepository
from .profile import HttpProfileRepository
from .recurring import HttpRecurringRepository
from .reports import HttpPaymentSourceRepository, HttpReportsRepository
from .transaction import HttpExpenseRepository, HttpIncomeRepository

__all__ = [
    "HttpBankAccountRepository",
    "HttpBudgetRepository",
    "HttpCategoryRepository",
    "HttpExpenseRepository",
    "HttpFundSourceRepository",
    "HttpIncomeRepository",
    "HttpInstallmentRepository",
    "HttpLoanRepository",
    "HttpPaymentSourceRepository",
    "HttpProfileRepository",
    "HttpRecurringRepository",
    "HttpReportsRepository",
    "HttpResourceRepository",
    "ensure_user_owned",
]
