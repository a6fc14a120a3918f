"""
models/budget.py
----------------
Domain models for budget categories, thresholds, notification settings
and the derived aggregates (snapshot and current spending).
"""

from dataclasses import dataclass, field, replace
from typing import Optional

import config


@dataclass(frozen=True)
class BudgetCategory:
    """
    A named spending category with a budget ceiling.

    Attributes:
        id: Unique identifier assigned by the registry.
        name: Display label; transactions match it exactly.
        limit: Non-negative budget ceiling.
        spent: Derived expense total. Never a source of truth, it is
            recomputed on every derivation.
        color: Hex colour used by the UI.
        icon: Icon name used by the UI.
    """
    id: str
    name: str
    limit: float
    spent: float = 0.0
    color: str = "#6B7280"
    icon: str = "MoreHorizontal"

    @property
    def usage_pct(self) -> Optional[float]:
        """Share of the limit already spent, or None when the limit is zero."""
        if self.limit <= 0:
            return None
        return self.spent / self.limit * 100

    def with_spent(self, spent: float) -> "BudgetCategory":
        return replace(self, spent=spent)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "limit": self.limit,
            "spent": self.spent,
            "color": self.color,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BudgetCategory":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            limit=float(data.get("limit", 0)),
            spent=float(data.get("spent", 0)),
            color=data.get("color", "#6B7280"),
            icon=data.get("icon", "MoreHorizontal"),
        )


@dataclass(frozen=True)
class NotificationSettings:
    """
    Alerting configuration.

    Attributes:
        budget_warning_pct: Usage percentage (0-100) at which budget
            warnings start.
        low_balance_abs: Balance at or below which a low balance alert fires.
        irregular_expense_pct: Reserved; no alert rule reads it yet.
        enabled: Master switch for every alert.
    """
    budget_warning_pct: float = config.DEFAULT_BUDGET_WARNING_PCT
    low_balance_abs: float = config.DEFAULT_LOW_BALANCE
    irregular_expense_pct: float = config.DEFAULT_IRREGULAR_EXPENSE_PCT
    enabled: bool = config.DEFAULT_NOTIFICATIONS_ENABLED

    def to_dict(self) -> dict:
        return {
            "budget_warning_pct": self.budget_warning_pct,
            "low_balance_abs": self.low_balance_abs,
            "irregular_expense_pct": self.irregular_expense_pct,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NotificationSettings":
        defaults = cls()
        return cls(
            budget_warning_pct=float(data.get("budget_warning_pct", defaults.budget_warning_pct)),
            low_balance_abs=float(data.get("low_balance_abs", defaults.low_balance_abs)),
            irregular_expense_pct=float(data.get("irregular_expense_pct", defaults.irregular_expense_pct)),
            enabled=bool(data.get("enabled", defaults.enabled)),
        )


@dataclass(frozen=True)
class BudgetThresholds:
    """Monthly, weekly and daily spending budgets."""
    monthly: float = config.DEFAULT_MONTHLY_BUDGET
    weekly: float = config.DEFAULT_WEEKLY_BUDGET
    daily: float = config.DEFAULT_DAILY_BUDGET


@dataclass(frozen=True)
class CurrentSpending:
    """Expense totals inside the rolling month, week and day windows."""
    monthly: float = 0.0
    weekly: float = 0.0
    daily: float = 0.0


@dataclass(frozen=True)
class BudgetSnapshot:
    """
    Aggregate financial state, recomputed from scratch on every query.

    ``goals`` is carried through untouched; nothing populates it.
    """
    total_income: float
    total_expenses: float
    balance: float
    monthly_budget: float
    weekly_budget: float
    daily_budget: float
    categories: tuple[BudgetCategory, ...] = ()
    goals: tuple = ()
    notifications: NotificationSettings = field(default_factory=NotificationSettings)

    def category(self, name: str) -> Optional[BudgetCategory]:
        """First category with this exact name, if any."""
        return next((c for c in self.categories if c.name == name), None)


DEFAULT_CATEGORIES: tuple[BudgetCategory, ...] = (
    BudgetCategory(id="1", name="Food & Dining", limit=15000, color="#EF4444", icon="UtensilsCrossed"),
    BudgetCategory(id="2", name="Transportation", limit=8000, color="#3B82F6", icon="Car"),
    BudgetCategory(id="3", name="Entertainment", limit=5000, color="#8B5CF6", icon="Film"),
    BudgetCategory(id="4", name="Shopping", limit=12000, color="#F59E0B", icon="ShoppingBag"),
    BudgetCategory(id="5", name="Bills & Utilities", limit=20000, color="#10B981", icon="Receipt"),
    BudgetCategory(id="6", name="Healthcare", limit=8000, color="#EC4899", icon="Heart"),
    BudgetCategory(id="7", name="Education", limit=6000, color="#6366F1", icon="GraduationCap"),
    BudgetCategory(id="8", name="Other", limit=5000, color="#6B7280", icon="MoreHorizontal"),
)
