"""Chart helpers for Flet views."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterable

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from ..models.reports import CashFlowPoint, CategorySlice, TrendPoint

INCOME_COLOR = "#22C55E"
EXPENSE_COLOR = "#EF4444"


def _save(fig) -> Path:
    with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
        fig.savefig(tmp.name, bbox_inches="tight", dpi=100)
        path = Path(tmp.name)
    plt.close(fig)
    return path


def _placeholder(message: str, figsize=(6, 5)) -> Path:
    fig, ax = plt.subplots(figsize=figsize)
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=12, color="#999")
    ax.axis("off")
    return _save(fig)


def category_breakdown_png(slices: Iterable[CategorySlice], currency: str = "LKR") -> Path:
    """Render the expense-by-category donut and return the PNG path."""

    rows = [s for s in slices if float(s.amount) > 0]
    if not rows:
        return _placeholder("No spending data")

    sizes = [float(s.amount) for s in rows]
    total = sum(sizes)
    cmap = plt.get_cmap("tab20")
    colors = [s.color or cmap(i / len(rows)) for i, s in enumerate(rows)]

    fig, ax = plt.subplots(figsize=(8, 6))
    wedges, _texts, _autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > 3 else "",
        wedgeprops=dict(width=0.5, edgecolor="white"),
        startangle=90,
        colors=colors,
        pctdistance=0.75,
    )
    ax.text(0, 0, f"Total\n{currency} {total:,.0f}", ha="center", va="center", fontsize=12, fontweight="bold")
    ax.legend(
        wedges,
        [f"{s.name}: {currency} {float(s.amount):,.0f}" for s in rows],
        loc="center left",
        bbox_to_anchor=(1, 0.5),
        fontsize=9,
    )
    ax.set_title("Spending by Category", fontsize=14, fontweight="bold")
    ax.axis("equal")
    plt.tight_layout()
    return _save(fig)


def cashflow_trend_png(
    points: Iterable[TrendPoint | CashFlowPoint], currency: str = "LKR"
) -> Path:
    """Render income against expenses per month and return the PNG path."""

    rows = list(points)
    if not rows:
        return _placeholder("No transaction data yet", figsize=(8, 5))

    labels = [getattr(p, "month", None) or getattr(p, "name", "") for p in rows]
    income = [float(p.income) for p in rows]
    expense = [float(p.expense) for p in rows]
    x_positions = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(x_positions, income, marker="o", linewidth=2.5, markersize=8, label="Income", color=INCOME_COLOR)
    ax.plot(x_positions, expense, marker="s", linewidth=2.5, markersize=8, label="Expenses", color=EXPENSE_COLOR)
    ax.fill_between(
        x_positions, income, expense,
        where=[i >= e for i, e in zip(income, expense)],
        color="#DCFCE7", alpha=0.4, label="Surplus",
    )
    ax.fill_between(
        x_positions, income, expense,
        where=[i < e for i, e in zip(income, expense)],
        color="#FEE2E2", alpha=0.4, label="Deficit",
    )

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title("Cash Flow by Month", fontsize=14, fontweight="bold", pad=15)
    ax.set_ylabel(f"Amount ({currency})", fontsize=11)

    # ticks before tick labels
    ax.set_xticks(x_positions)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, _p: f"{x:,.0f}"))
    ax.legend(loc="upper left", framealpha=0.9)

    net = sum(income) - sum(expense)
    ax.text(
        0.98, 0.98,
        f"Income: {sum(income):,.0f}\nExpenses: {sum(expense):,.0f}\nNet: {net:,.0f}",
        transform=ax.transAxes, fontsize=9, va="top", ha="right",
        bbox=dict(boxstyle="round", facecolor="wheat", alpha=0.8),
    )
    plt.tight_layout()
    return _save(fig)
