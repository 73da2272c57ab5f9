"""Repository protocol definitions for domain layer."""

from .account import BankAccountRepository, FundSourceRepository
from .budget import BudgetRepository
from .category import CategoryRepository
from .liability import InstallmentRepository, LoanRepository
from .profile import ProfileRepository
from .recurring import RecurringRepository
from .reports import PaymentSourceRepository, ReportsRepository
from .resource import ResourceRepository

__all__ = [
    "BankAccountRepository",
    "BudgetRepository",
    "CategoryRepository",
    "FundSourceRepository",
    "InstallmentRepository",
    "LoanRepository",
    "PaymentSourceRepository",
    "ProfileRepository",
    "RecurringRepository",
    "ReportsRepository",
    "ResourceRepository",
]
