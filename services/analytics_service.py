"""
services/analytics_service.py
-----------------------------
Spending analytics built on top of the derived snapshot:
monthly trends, recent daily spend, category breakdowns and the
dashboard summary figures.
"""

from typing import Iterable, Optional

import pandas as pd

from models.budget import BudgetSnapshot
from models.transaction import EXPENSE, INCOME, Transaction

_COLUMNS = ["id", "type", "amount", "category", "description", "date"]


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """One row per transaction; ``date`` is a datetime64 column."""
    df = pd.DataFrame(
        [
            {
                "id": t.id,
                "type": t.type,
                "amount": t.amount,
                "category": t.category,
                "description": t.description,
                "date": t.date,
            }
            for t in transactions
        ],
        columns=_COLUMNS,
    )
    df["date"] = pd.to_datetime(df["date"])
    return df


def monthly_trends(transactions: Iterable[Transaction], months: int = 6) -> list[dict]:
    """
    Income and expense per calendar month, oldest first, limited to the
    last ``months`` months that have any activity.

    Returns:
        List of {'month': 'YYYY-MM', 'income': float, 'expense': float}.
    """
    df = transactions_frame(transactions)
    if df.empty:
        return []

    df["month"] = df["date"].dt.to_period("M")
    pivot = (
        df.pivot_table(index="month", columns="type", values="amount", aggfunc="sum", fill_value=0)
        .reindex(columns=[INCOME, EXPENSE], fill_value=0)
        .sort_index()
        .tail(months)
    )
    return [
        {"month": str(period), "income": float(row[INCOME]), "expense": float(row[EXPENSE])}
        for period, row in pivot.iterrows()
    ]


def daily_spending(transactions: Iterable[Transaction], days: int = 14) -> list[dict]:
    """
    Expense total per date for the last ``days`` dates with expenses,
    oldest first.

    Returns:
        List of {'date': 'YYYY-MM-DD', 'amount': float}.
    """
    df = transactions_frame(transactions)
    df = df[df["type"] == EXPENSE]
    if df.empty:
        return []

    totals = df.groupby(df["date"].dt.date)["amount"].sum().sort_index().tail(days)
    return [{"date": day.isoformat(), "amount": float(amount)} for day, amount in totals.items()]


def category_breakdown(snapshot: BudgetSnapshot) -> list[dict]:
    """
    Share of total category spend per category with any spend,
    largest first.
    """
    total = sum(c.spent for c in snapshot.categories)
    rows = [
        {
            "name": c.name,
            "value": c.spent,
            "color": c.color,
            "percentage": round(c.spent / total * 100, 1),
        }
        for c in snapshot.categories
        if c.spent > 0
    ]
    return sorted(rows, key=lambda r: r["value"], reverse=True)


def budget_vs_spent(snapshot: BudgetSnapshot) -> list[dict]:
    """Limit, spend and remaining headroom (never negative) per category."""
    return [
        {
            "category": c.name,
            "budget": c.limit,
            "spent": c.spent,
            "remaining": max(0.0, c.limit - c.spent),
            "usage_pct": c.usage_pct,
        }
        for c in snapshot.categories
    ]


def dashboard_summary(snapshot: BudgetSnapshot, top: int = 3) -> dict:
    """
    Headline figures for the dashboard.

    ``budget_used_pct`` is None when no monthly budget is set.
    """
    active = [c for c in snapshot.categories if c.spent > 0]
    top_categories = sorted(active, key=lambda c: c.spent, reverse=True)[:top]
    budget_used_pct: Optional[float] = (
        snapshot.total_expenses / snapshot.monthly_budget * 100
        if snapshot.monthly_budget > 0
        else None
    )
    return {
        "budget_used_pct": budget_used_pct,
        "budget_remaining": snapshot.monthly_budget - snapshot.total_expenses,
        "top_categories": top_categories,
        "highest_spending": top_categories[0].name if top_categories else None,
        "active_categories": len(active),
        "total_categories": len(snapshot.categories),
        "average_per_category": snapshot.total_expenses / max(len(active), 1),
    }
