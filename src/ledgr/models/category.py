"""Transaction categories as returned by ``/categories``."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

CATEGORY_TYPES = ("income", "expense")


class Category(SQLModel):
    """Income or expense category.

    ``user_id`` is the owner; ``None`` marks a system default that the server
    refuses to modify.
    """

    id: int
    name: str = ""
    icon: Optional[str] = Field(default=None, max_length=64)
    color: Optional[str] = Field(default=None, max_length=16)
    type: str = "expense"
    user_id: Optional[int] = None

    @property
    def is_default(self) -> bool:
        return self.user_id is None

    @property
    def is_income(self) -> bool:
        return self.type == "income"
