"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft
import httpx

from ..api.client import ApiClient
from ..api.session import AuthSession, TokenStore
from ..config import BaseConfig
from ..infra.repositories import (
    HttpBankAccountRepository,
    HttpBudgetRepository,
    HttpCategoryRepository,
    HttpExpenseRepository,
    HttpFundSourceRepository,
    HttpIncomeRepository,
    HttpInstallmentRepository,
    HttpLoanRepository,
    HttpPaymentSourceRepository,
    HttpProfileRepository,
    HttpRecurringRepository,
    HttpReportsRepository,
)
from ..models.user import User


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    # Configuration
    config: BaseConfig

    # Session and transport
    session: AuthSession
    client: ApiClient

    # Repositories
    expense_repo: HttpExpenseRepository
    income_repo: HttpIncomeRepository
    category_repo: HttpCategoryRepository
    bank_account_repo: HttpBankAccountRepository
    fund_source_repo: HttpFundSourceRepository
    loan_repo: HttpLoanRepository
    installment_repo: HttpInstallmentRepository
    recurring_repo: HttpRecurringRepository
    budget_repo: HttpBudgetRepository
    reports_repo: HttpReportsRepository
    payment_source_repo: HttpPaymentSourceRepository
    profile_repo: HttpProfileRepository

    # UI State
    theme_mode: ft.ThemeMode = ft.ThemeMode.LIGHT

    # Page reference (set after initialization)
    page: Optional[ft.Page] = None
    dev_mode: bool = False

    @property
    def current_user(self) -> Optional[User]:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def currency(self) -> str:
        user = self.session.user
        return (user.currency if user and user.currency else self.config.CURRENCY).upper()

    def close(self) -> None:
        self.client.close()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    transport: Optional[httpx.BaseTransport] = None,
    session: Optional[AuthSession] = None,
) -> AppContext:
    """Create the application context, restoring any persisted session."""

    if config is None:
        config = BaseConfig()

    if session is None:
        session = AuthSession.restore(TokenStore(config.session_path))
    client = ApiClient(config, session, transport=transport)
    per_page = config.PER_PAGE

    return AppContext(
        config=config,
        session=session,
        client=client,
        expense_repo=HttpExpenseRepository(client, per_page=per_page),
        income_repo=HttpIncomeRepository(client, per_page=per_page),
        category_repo=HttpCategoryRepository(client, per_page=per_page),
        bank_account_repo=HttpBankAccountRepository(client, per_page=per_page),
        fund_source_repo=HttpFundSourceRepository(client, per_page=per_page),
        loan_repo=HttpLoanRepository(client, per_page=per_page),
        installment_repo=HttpInstallmentRepository(client, per_page=per_page),
        recurring_repo=HttpRecurringRepository(client, per_page=per_page),
        budget_repo=HttpBudgetRepository(client, per_page=per_page),
        reports_repo=HttpReportsRepository(client),
        payment_source_repo=HttpPaymentSourceRepository(client),
        profile_repo=HttpProfileRepository(client),
        dev_mode=config.DEV_MODE,
    )
