"""Tests for CSV export helpers."""

from __future__ import annotations

import csv

from ledgr.models.transaction import Expense, Income
from ledgr.services.export_csv import HEADERS, export_entries_csv


def test_export_entries_csv_creates_file(tmp_path, expense_factory):
    """Exporting entries writes a CSV with header and rows."""

    entries = [
        Expense.model_validate(expense_factory(id=1, amount="12.50", description="Coffee")),
        Expense.model_validate(
            expense_factory(id=2, amount="99.99", description="Fuel, premium", bank_account=None, loan={"id": 8, "lender_name": "Dad"})
        ),
    ]
    output_path = tmp_path / "exports" / "expenses.csv"

    result = export_entries_csv(entries=entries, output_path=output_path)

    assert result == output_path
    with output_path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        rows = list(reader)
    assert reader.fieldnames == HEADERS
    assert rows[0] == {
        "id": "1",
        "date": "2024-05-01",
        "amount": "12.50",
        "category": "Food",
        "source_type": "bank",
        "source": "City Bank",
        "description": "Coffee",
    }
    assert rows[1]["source_type"] == "loan"
    assert rows[1]["source"] == "Dad"
    assert rows[1]["description"] == "Fuel, premium"


def test_export_handles_missing_relations(tmp_path):
    entries = [Income(id=5, amount="100")]
    output_path = tmp_path / "income.csv"

    export_entries_csv(entries=entries, output_path=output_path)

    with output_path.open(newline="", encoding="utf-8") as fh:
        row = next(csv.DictReader(fh))
    assert row["category"] == "Uncategorized"
    assert row["source_type"] == ""
    assert row["date"] == ""
    assert row["description"] == ""
