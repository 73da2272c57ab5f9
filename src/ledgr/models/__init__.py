"""Data transfer objects for the Ledgr REST API."""

from .account import BankAccount, FundSource
from .budget import Budget, BudgetOverview, BudgetWarning
from .category import Category
from .funding import FundingKind, FundingRef, PaymentSource
from .installment import Installment
from .loan import Loan, LoanRepayment, LoanStats
from .pagination import PaginationMeta
from .recurring import RecurringTransaction
from .reports import CategorySlice, DashboardStats, FinancialReport, TrendPoint, UpcomingBill
from .transaction import Expense, Income, LedgerEntry
from .user import User

__all__ = [
    "BankAccount",
    "Budget",
    "BudgetOverview",
    "BudgetWarning",
    "Category",
    "CategorySlice",
    "DashboardStats",
    "Expense",
    "FinancialReport",
    "FundSource",
    "FundingKind",
    "FundingRef",
    "Income",
    "Installment",
    "LedgerEntry",
    "Loan",
    "LoanRepayment",
    "LoanStats",
    "PaginationMeta",
    "PaymentSource",
    "RecurringTransaction",
    "TrendPoint",
    "UpcomingBill",
    "User",
]
