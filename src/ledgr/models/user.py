"""Signed-in user profile."""

from __future__ import annotations

from typing import Optional

from sqlmodel import SQLModel


class User(SQLModel):
    id: int
    name: str = ""
    email: str = ""
    currency: Optional[str] = None
