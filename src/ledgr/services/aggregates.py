"""Display totals derived from the currently loaded page.

These reductions only ever see one page of results. Where the server also
reports a figure for the whole filtered collection, :class:`Totals` carries
both so the UI can label each one for what it is.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, Union

from ..models.base import to_decimal

KeyFunc = Union[str, Callable[[Any], Any]]


def _getter(key: KeyFunc) -> Callable[[Any], Any]:
    if callable(key):
        return key
    return lambda item: getattr(item, key, None)


def sum_amounts(items: Iterable[Any], field: str = "amount") -> Decimal:
    """Sum one money field across ``items``; missing values count as zero."""

    return sum((to_decimal(getattr(item, field, None)) for item in items), Decimal("0"))


def count_by(items: Iterable[Any], key: KeyFunc) -> dict[Any, int]:
    """Count items per value of ``key`` (attribute name or callable)."""

    get = _getter(key)
    return dict(Counter(get(item) for item in items))


def page_totals(items: Iterable[Any], field: str = "amount") -> dict[str, Decimal]:
    """Sum, count and average of ``field`` on the loaded page."""

    rows = list(items)
    total = sum_amounts(rows, field)
    count = len(rows)
    average = (total / count) if count else Decimal("0")
    return {"total": total, "count": Decimal(count), "average": average}


@dataclass(frozen=True)
class Totals:
    """A page-local sum alongside the server figure when one exists."""

    page_local: Decimal
    authoritative: Optional[Decimal] = None

    @property
    def has_authoritative(self) -> bool:
        return self.authoritative is not None

    @property
    def is_partial(self) -> bool:
        """True when the page clearly does not cover the whole collection."""

        return self.authoritative is not None and self.authoritative != self.page_local

    @classmethod
    def of(cls, items: Iterable[Any], field: str = "amount", authoritative: Any = None) -> "Totals":
        server = to_decimal(authoritative) if authoritative is not None else None
        return cls(page_local=sum_amounts(items, field), authoritative=server)


def category_type_counts(categories: Iterable[Any]) -> dict[str, int]:
    counts = count_by(categories, "type")
    return {"income": counts.get("income", 0), "expense": counts.get("expense", 0)}


def active_counts(items: Iterable[Any]) -> dict[str, int]:
    counts = count_by(items, lambda item: bool(getattr(item, "is_active", False)))
    return {"active": counts.get(True, 0), "inactive": counts.get(False, 0)}


_MONTHLY_FACTORS = {
    "daily": Decimal("30"),
    "weekly": Decimal("52") / Decimal("12"),
    "monthly": Decimal("1"),
    "yearly": Decimal("1") / Decimal("12"),
}


def monthly_recurring_cost(items: Iterable[Any]) -> Decimal:
    """Normalize active subscriptions on the page to a monthly figure."""

    total = Decimal("0")
    for item in items:
        if not getattr(item, "is_active", False):
            continue
        factor = _MONTHLY_FACTORS.get(getattr(item, "frequency", "monthly"), Decimal("1"))
        total += to_decimal(getattr(item, "amount", None)) * factor
    return total.quantize(Decimal("0.01"))


def average_balance(items: Iterable[Any], field: str = "balance_remaining") -> Decimal:
    rows = list(items)
    if not rows:
        return Decimal("0")
    return sum_amounts(rows, field) / len(rows)


def percentage(part: Any, whole: Any) -> float:
    """``part`` as a percent of ``whole``; 0 when ``whole`` is not positive."""

    denominator = to_decimal(whole)
    if denominator <= 0:
        return 0.0
    return float(to_decimal(part) / denominator * 100)
