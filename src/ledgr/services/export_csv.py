"""CSV export helpers for Ledgr."""

from __future__ import annotations

import csv
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable

from ..models.transaction import LedgerEntry

HEADERS = ["id", "date", "amount", "category", "source_type", "source", "description"]


def _serialize_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def export_entries_csv(*, entries: Iterable[LedgerEntry], output_path: Path) -> Path:
    """Write expense or income rows to CSV at `output_path`.

    Columns are deterministic: id, date, amount, category, source_type,
    source, description. Only the rows passed in are written, which for a
    list view is the loaded page. Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in entries:
            funding = entry.funding
            writer.writerow(
                {
                    "id": _serialize_value(entry.id),
                    "date": _serialize_value(entry.date),
                    "amount": _serialize_value(entry.amount),
                    "category": entry.category_name,
                    "source_type": funding.kind.value if funding else "",
                    "source": funding.name if funding else "",
                    "description": _serialize_value(entry.description),
                }
            )

    return output_path
