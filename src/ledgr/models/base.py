"""Shared field types for API data transfer objects."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def _coerce_date(value: Any) -> Any:
    """Accept ``YYYY-MM-DD`` as well as full ISO timestamps for date fields."""

    if value is None or isinstance(value, date):
        if isinstance(value, datetime):
            return value.date()
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return text.split("T", 1)[0].split(" ", 1)[0]
    return value


def _coerce_money(value: Any) -> Any:
    """Parse server decimals that may arrive as numbers or strings."""

    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            return value
    return value


IsoDate = Annotated[Optional[date], BeforeValidator(_coerce_date)]
Money = Annotated[Decimal, BeforeValidator(_coerce_money)]
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Best-effort conversion used by aggregates; bad input counts as zero."""

    coerced = _coerce_money(value)
    if isinstance(coerced, Decimal):
        return coerced
    try:
        return Decimal(str(coerced))
    except (InvalidOperation, ValueError):
        return Decimal("0")
