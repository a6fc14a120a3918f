"""
services/budget_store.py
------------------------
Explicit per-user store for budget state.

The store owns the transaction log, the category registry, the budget
thresholds, the notification settings and the active alerts. Every
mutator applies its change in memory, synchronously recomputes the
snapshot and alert set, and only then hands the changed value to the
persistence callback (if any).
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Optional

from models.budget import (
    DEFAULT_CATEGORIES,
    BudgetCategory,
    BudgetSnapshot,
    BudgetThresholds,
    CurrentSpending,
    NotificationSettings,
)
from models.transaction import Transaction
from services import budget_deriver, notification_evaluator, period_aggregator
from services.category_registry import CategoryRegistry
from services.notification_state import NotificationState
from services.transaction_log import TransactionLog
from utils.logger import get_logger

logger = get_logger(__name__)

# ── Persistence keys ──────────────────────────────────────
TRANSACTIONS_KEY = "budget-transactions"
CATEGORIES_KEY = "budget-categories"
MONTHLY_KEY = "budget-monthly"
WEEKLY_KEY = "budget-weekly"
DAILY_KEY = "budget-daily"
NOTIFICATIONS_KEY = "budget-notifications"

STATE_KEYS = (
    TRANSACTIONS_KEY, CATEGORIES_KEY, MONTHLY_KEY,
    WEEKLY_KEY, DAILY_KEY, NOTIFICATIONS_KEY,
)

PersistCallback = Callable[[str, Any], None]


class BudgetStore:
    """
    Reactive budget state with recompute-on-change.

    Args:
        transactions: Initial log contents, in creation order.
        categories: Initial categories (defaults when None).
        thresholds: Monthly / weekly / daily budgets.
        notifications: Alerting settings.
        persist: Called as ``persist(key, value)`` after each mutation.
        clock: Source of the current local instant.
    """

    def __init__(
        self,
        transactions=(),
        categories=None,
        thresholds: Optional[BudgetThresholds] = None,
        notifications: Optional[NotificationSettings] = None,
        persist: Optional[PersistCallback] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._clock = clock
        self._log = TransactionLog(transactions, clock=clock)
        self._registry = CategoryRegistry(DEFAULT_CATEGORIES if categories is None else categories)
        self._thresholds = thresholds or BudgetThresholds()
        self._notifications = notifications or NotificationSettings()
        self._alerts = NotificationState()
        self._persist = persist
        self.refresh()

    # ── Construction from persisted state ─────────────────

    @classmethod
    def from_state(cls, state: dict, persist: Optional[PersistCallback] = None,
                   clock: Callable[[], datetime] = datetime.now) -> "BudgetStore":
        """
        Rebuild a store from the key-value state written by ``to_state``.
        Missing keys fall back to defaults.

        Raises:
            InvalidInputError: If a persisted transaction is malformed.
        """
        defaults = BudgetThresholds()
        transactions = [Transaction.from_dict(t) for t in state.get(TRANSACTIONS_KEY) or []]
        categories = (
            [BudgetCategory.from_dict(c) for c in state[CATEGORIES_KEY]]
            if state.get(CATEGORIES_KEY) is not None
            else None
        )
        thresholds = BudgetThresholds(
            monthly=float(state.get(MONTHLY_KEY, defaults.monthly)),
            weekly=float(state.get(WEEKLY_KEY, defaults.weekly)),
            daily=float(state.get(DAILY_KEY, defaults.daily)),
        )
        notifications = (
            NotificationSettings.from_dict(state[NOTIFICATIONS_KEY])
            if state.get(NOTIFICATIONS_KEY)
            else None
        )
        return cls(
            transactions=transactions,
            categories=categories,
            thresholds=thresholds,
            notifications=notifications,
            persist=persist,
            clock=clock,
        )

    def to_state(self) -> dict:
        return {key: self._value_for(key) for key in STATE_KEYS}

    def _value_for(self, key: str) -> Any:
        if key == TRANSACTIONS_KEY:
            return [t.to_dict() for t in self._log]
        if key == CATEGORIES_KEY:
            return [c.to_dict() for c in self._registry]
        if key == MONTHLY_KEY:
            return self._thresholds.monthly
        if key == WEEKLY_KEY:
            return self._thresholds.weekly
        if key == DAILY_KEY:
            return self._thresholds.daily
        if key == NOTIFICATIONS_KEY:
            return self._notifications.to_dict()
        raise KeyError(key)

    # ── Recomputation ─────────────────────────────────────

    def refresh(self) -> list[str]:
        """
        Re-derive the snapshot and replace the active alerts.
        Called after every mutation; also useful when the clock has moved
        into a new day without any mutation.
        """
        snapshot = self.derive()
        spending = self.current_spending()
        self._alerts.replace(
            notification_evaluator.evaluate(snapshot, spending, self._notifications)
        )
        return self._alerts.active

    def _changed(self, *keys: str) -> None:
        self.refresh()
        if self._persist is None:
            return
        for key in keys:
            self._persist(key, self._value_for(key))

    # ── Queries ───────────────────────────────────────────

    def derive(self) -> BudgetSnapshot:
        return budget_deriver.derive(
            self._log.snapshot(),
            self._registry.snapshot(),
            self._thresholds.monthly,
            self._thresholds.weekly,
            self._thresholds.daily,
            self._notifications,
        )

    def current_spending(self) -> CurrentSpending:
        return period_aggregator.current_spending(self._log.snapshot(), self._clock())

    def active_notifications(self) -> list[str]:
        return self._alerts.active

    def clear_notification(self, message: str) -> bool:
        """Dismiss one alert until the next recomputation."""
        return self._alerts.dismiss(message)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._log.snapshot()

    @property
    def categories(self) -> tuple[BudgetCategory, ...]:
        return self._registry.snapshot()

    @property
    def thresholds(self) -> BudgetThresholds:
        return self._thresholds

    @property
    def notifications(self) -> NotificationSettings:
        return self._notifications

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._log.get(transaction_id)

    def get_category(self, category_id: str) -> Optional[BudgetCategory]:
        return self._registry.get(category_id)

    def find_category(self, name: str) -> Optional[BudgetCategory]:
        return self._registry.find_by_name(name)

    # ── Transactions ──────────────────────────────────────

    def add_transaction(self, type: str, amount: float, category: str,
                        description: str = "", on: Optional[date] = None) -> Transaction:
        transaction = self._log.append(type, amount, category, description, on)
        self._changed(TRANSACTIONS_KEY)
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        deleted = self._log.delete(transaction_id)
        if deleted:
            self._changed(TRANSACTIONS_KEY)
        return deleted

    # ── Categories ────────────────────────────────────────

    def add_category(self, name: str, limit: float, color: str = "#6B7280",
                     icon: str = "MoreHorizontal") -> BudgetCategory:
        category = self._registry.add(name, limit, color, icon)
        self._changed(CATEGORIES_KEY)
        return category

    def update_category(self, category_id: str, **fields) -> Optional[BudgetCategory]:
        updated = self._registry.update(category_id, **fields)
        if updated is not None:
            self._changed(CATEGORIES_KEY)
        return updated

    def delete_category(self, category_id: str) -> bool:
        deleted = self._registry.delete(category_id)
        if deleted:
            self._changed(CATEGORIES_KEY)
        return deleted

    # ── Thresholds and settings ───────────────────────────

    def set_monthly_budget(self, amount: float) -> None:
        self._thresholds = replace(self._thresholds, monthly=amount)
        logger.info(f"Monthly budget set to {amount}")
        self._changed(MONTHLY_KEY)

    def set_weekly_budget(self, amount: float) -> None:
        self._thresholds = replace(self._thresholds, weekly=amount)
        logger.info(f"Weekly budget set to {amount}")
        self._changed(WEEKLY_KEY)

    def set_daily_budget(self, amount: float) -> None:
        self._thresholds = replace(self._thresholds, daily=amount)
        logger.info(f"Daily budget set to {amount}")
        self._changed(DAILY_KEY)

    def set_notifications(self, settings: Optional[NotificationSettings] = None,
                          **changes) -> NotificationSettings:
        """
        Replace the notification settings, or patch individual fields
        (``budget_warning_pct``, ``low_balance_abs``,
        ``irregular_expense_pct``, ``enabled``).
        """
        base = settings or self._notifications
        self._notifications = replace(base, **changes)
        logger.info(f"Notification settings updated: {self._notifications}")
        self._changed(NOTIFICATIONS_KEY)
        return self._notifications
