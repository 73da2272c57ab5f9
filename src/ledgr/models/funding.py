"""Explicit funding reference shared by expenses, incomes, installments and subscriptions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from sqlmodel import SQLModel

from .base import Money, ZERO


class FundingKind(str, Enum):
    """Which balance a transaction debits or credits.

    Values double as the ``source_type`` list filter.
    """

    BANK = "bank"
    FUND = "fund"
    LOAN = "loan"

    @property
    def payload_key(self) -> str:
        return _PAYLOAD_KEYS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_PAYLOAD_KEYS = {
    FundingKind.BANK: "bank_account_id",
    FundingKind.FUND: "fund_source_id",
    FundingKind.LOAN: "loan_id",
}
_LABELS = {
    FundingKind.BANK: "Bank account",
    FundingKind.FUND: "Cash fund",
    FundingKind.LOAN: "Loan",
}


@dataclass(frozen=True)
class FundingRef:
    """Exactly one payment source: a kind plus the referenced id."""

    kind: FundingKind
    id: int
    name: str = ""

    def payload(self) -> dict[str, int]:
        """Request body fragment naming this source and no other."""

        return {self.kind.payload_key: self.id}

    @property
    def option_key(self) -> str:
        """Stable ``kind:id`` string used as a dropdown value."""

        return f"{self.kind.value}:{self.id}"

    @classmethod
    def parse_option(cls, value: str | None) -> Optional["FundingRef"]:
        if not value or ":" not in value:
            return None
        kind_raw, _, id_raw = value.partition(":")
        try:
            return cls(FundingKind(kind_raw), int(id_raw))
        except ValueError:
            return None


def funding_from_relations(
    bank_account: Any = None, fund_source: Any = None, loan: Any = None
) -> Optional[FundingRef]:
    """Build the tagged reference from the three optional nested relations."""

    if bank_account is not None:
        return FundingRef(FundingKind.BANK, bank_account.id, bank_account.display_name)
    if fund_source is not None:
        return FundingRef(FundingKind.FUND, fund_source.id, fund_source.display_name)
    if loan is not None:
        return FundingRef(FundingKind.LOAN, loan.id, loan.lender_name)
    return None


class PaymentSource(SQLModel):
    """Flattened option from ``/payment-sources``."""

    id: int
    type: FundingKind
    name: str = ""
    balance: Money = ZERO
    original_amount: Optional[Decimal] = None
    display_name: str = ""

    @property
    def ref(self) -> FundingRef:
        return FundingRef(self.type, self.id, self.display_name or self.name)
