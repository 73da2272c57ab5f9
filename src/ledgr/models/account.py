"""Balance holders: bank accounts and cash fund sources."""

from __future__ import annotations

from typing import Optional

from sqlmodel import SQLModel

from .base import Money, ZERO


class BankAccount(SQLModel):
    """Bank account; ``balance`` is maintained by the server."""

    id: int
    bank_name: str = ""
    name: Optional[str] = None
    account_number: str = ""
    balance: Money = ZERO
    account_holder_name: Optional[str] = None
    branch_code: Optional[str] = None
    color: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.bank_name or self.name or f"Account #{self.id}"

    @property
    def masked_number(self) -> str:
        digits = (self.account_number or "").strip()
        if len(digits) <= 4:
            return digits
        return f"**** {digits[-4:]}"


class FundSource(SQLModel):
    """Cash on hand tracked outside of a bank."""

    id: int
    source_name: str = ""
    name: Optional[str] = None
    amount: Money = ZERO
    description: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.source_name or self.name or f"Fund #{self.id}"
