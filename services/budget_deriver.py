"""
services/budget_deriver.py
--------------------------
Pure derivation of the aggregate budget snapshot.

Every call recomputes totals and per-category spend from the full
transaction log (O(transactions x categories)). There is no caching
between calls; a larger log would want a per-category running index
behind the same function.
"""

from typing import Iterable

from models.budget import BudgetCategory, BudgetSnapshot, NotificationSettings
from models.transaction import Transaction


def category_spent(transactions: Iterable[Transaction], name: str) -> float:
    """Sum of expenses whose category label equals ``name`` exactly."""
    return sum(t.amount for t in transactions if t.is_expense() and t.category == name)


def derive(
    transactions: Iterable[Transaction],
    categories: Iterable[BudgetCategory],
    monthly_budget: float,
    weekly_budget: float,
    daily_budget: float,
    notifications: NotificationSettings,
) -> BudgetSnapshot:
    """
    Combine the transaction log, the category registry and the budget
    thresholds into a BudgetSnapshot.

    Category ``spent`` values are always recomputed; whatever value the
    incoming categories carry is ignored. Transactions pointing at a
    category name that no longer exists still count towards the totals
    but towards no category.
    """
    transactions = tuple(transactions)

    total_income = sum(t.amount for t in transactions if t.is_income())
    total_expenses = sum(t.amount for t in transactions if t.is_expense())

    updated = tuple(
        category.with_spent(category_spent(transactions, category.name))
        for category in categories
    )

    return BudgetSnapshot(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        monthly_budget=monthly_budget,
        weekly_budget=weekly_budget,
        daily_budget=daily_budget,
        categories=updated,
        goals=(),
        notifications=notifications,
    )
