"""
services/notification_evaluator.py
----------------------------------
Turns a budget snapshot and the current window spend into alert messages.
"""

from typing import Optional

from models.budget import BudgetSnapshot, CurrentSpending, NotificationSettings

LOW_BALANCE_ALERT = "Low balance alert"
MONTHLY_BUDGET_WARNING = "Monthly budget warning"
WEEKLY_BUDGET_WARNING = "Weekly budget warning"
DAILY_BUDGET_WARNING = "Daily budget warning"


def usage_pct(spent: float, limit: float) -> Optional[float]:
    """Percentage of ``limit`` used, or None when the limit is not positive."""
    if limit <= 0:
        return None
    return spent / limit * 100


def category_alert(name: str, pct: float) -> str:
    return f"{name} budget {'exceeded' if pct >= 100 else 'warning'}"


def evaluate(
    snapshot: BudgetSnapshot,
    current_spending: CurrentSpending,
    notifications: NotificationSettings,
) -> list[str]:
    """
    Produce the ordered list of active alerts.

    Order: category alerts (registry order), then the monthly, weekly
    and daily window warnings, then the low balance alert. A zero limit
    or budget never fires an alert.
    """
    if not notifications.enabled:
        return []

    threshold = notifications.budget_warning_pct
    messages: list[str] = []

    for category in snapshot.categories:
        pct = usage_pct(category.spent, category.limit)
        if pct is not None and pct >= threshold:
            messages.append(category_alert(category.name, pct))

    windows = (
        (current_spending.monthly, snapshot.monthly_budget, MONTHLY_BUDGET_WARNING),
        (current_spending.weekly, snapshot.weekly_budget, WEEKLY_BUDGET_WARNING),
        (current_spending.daily, snapshot.daily_budget, DAILY_BUDGET_WARNING),
    )
    for spent, budget, message in windows:
        pct = usage_pct(spent, budget)
        if pct is not None and pct >= threshold:
            messages.append(message)

    if snapshot.balance <= notifications.low_balance_abs:
        messages.append(LOW_BALANCE_ALERT)

    return messages
