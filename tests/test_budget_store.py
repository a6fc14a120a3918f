from dataclasses import replace
from datetime import date

import pytest

from models.budget import DEFAULT_CATEGORIES, BudgetCategory, BudgetThresholds
from services.budget_store import (
    CATEGORIES_KEY,
    MONTHLY_KEY,
    NOTIFICATIONS_KEY,
    STATE_KEYS,
    TRANSACTIONS_KEY,
    BudgetStore,
)


@pytest.fixture
def store(food, thresholds, settings, clock):
    return BudgetStore(
        categories=[food], thresholds=thresholds, notifications=settings, clock=clock,
    )


def food_alerts(store):
    return [a for a in store.active_notifications() if a.startswith("Food")]


class TestScenarios:
    def test_food_warning_then_exceeded(self, store):
        store.add_transaction("expense", 100, "Food")
        store.add_transaction("expense", 50, "Food")
        assert store.derive().category("Food").spent == 150
        assert food_alerts(store) == []

        store.add_transaction("expense", 10, "Food")
        assert store.derive().category("Food").spent == 160
        assert food_alerts(store) == ["Food budget warning"]

        store.add_transaction("expense", 60, "Food")
        assert store.derive().category("Food").spent == 220
        assert food_alerts(store) == ["Food budget exceeded"]

    def test_negative_balance_triggers_low_balance(self, store):
        store.add_transaction("income", 1000, "Salary")
        store.add_transaction("expense", 2500, "Rent")
        snapshot = store.derive()
        assert snapshot.balance == -1500
        assert "Low balance alert" in store.active_notifications()

    def test_zero_limit_category_is_silent(self, thresholds, settings, clock):
        other = BudgetCategory(id="8", name="Other", limit=0)
        store = BudgetStore(categories=[other], thresholds=thresholds,
                            notifications=settings, clock=clock)
        store.add_transaction("income", 100000, "Salary")
        store.add_transaction("expense", 10, "Other")
        assert store.active_notifications() == []
        assert store.derive().category("Other").usage_pct is None


class TestProperties:
    def test_balance_identity(self, store):
        for amount in (0.1, 0.2, 0.3):
            store.add_transaction("income", amount, "Salary")
            store.add_transaction("expense", amount / 3, "Food")
        snapshot = store.derive()
        assert snapshot.total_income - snapshot.total_expenses == snapshot.balance

    def test_add_then_delete_restores_snapshot(self, store):
        store.add_transaction("expense", 0.1, "Food")
        store.add_transaction("income", 0.7, "Salary")
        before = store.derive()
        alerts_before = store.active_notifications()

        tx = store.add_transaction("expense", 0.2, "Food")
        assert store.derive() != before
        store.delete_transaction(tx.id)

        assert store.derive() == before
        assert store.active_notifications() == alerts_before

    def test_delete_category_keeps_totals_and_other_spend(self, store):
        travel = store.add_category("Travel", 1000)
        store.add_transaction("expense", 120, "Food")
        store.add_transaction("expense", 300, "Travel")
        store.add_transaction("income", 900, "Salary")
        before = store.derive()

        assert store.delete_category(travel.id) is True
        after = store.derive()

        assert after.total_income == before.total_income
        assert after.total_expenses == before.total_expenses
        assert after.category("Travel") is None
        assert after.category("Food").spent == before.category("Food").spent
        assert len(store.transactions) == 3

    def test_dismissed_alert_reappears_after_unrelated_change(self, store):
        store.add_transaction("expense", 250, "Food")
        assert "Food budget exceeded" in store.active_notifications()

        assert store.clear_notification("Food budget exceeded") is True
        assert "Food budget exceeded" not in store.active_notifications()

        store.set_weekly_budget(30000)
        assert "Food budget exceeded" in store.active_notifications()

    def test_rename_orphans_history(self, store, food):
        store.add_transaction("expense", 190, "Food")
        assert food_alerts(store) == ["Food budget warning"]

        store.update_category(food.id, name="Meals")
        assert store.derive().category("Meals").spent == 0
        assert store.active_notifications() == ["Low balance alert"]


class TestMutators:
    def test_unknown_ids_are_noops(self, store):
        assert store.delete_transaction("missing") is False
        assert store.delete_category("missing") is False
        assert store.update_category("missing", limit=5) is None

    def test_threshold_setters(self, store):
        store.set_monthly_budget(100)
        store.set_weekly_budget(50)
        store.set_daily_budget(0)
        assert store.thresholds == BudgetThresholds(monthly=100, weekly=50, daily=0)

        store.add_transaction("income", 100000, "Salary")
        store.add_transaction("expense", 90, "Misc")
        assert store.active_notifications() == ["Monthly budget warning", "Weekly budget warning"]

    def test_current_spending_uses_clock(self, store):
        store.add_transaction("expense", 5, "Food", on=date(2026, 10, 14))
        store.add_transaction("expense", 7, "Food", on=date(2026, 10, 12))
        store.add_transaction("expense", 11, "Food", on=date(2026, 10, 2))
        spending = store.current_spending()
        assert (spending.monthly, spending.weekly, spending.daily) == (23, 12, 5)

    def test_disabling_notifications_clears_alerts(self, store):
        store.add_transaction("expense", 500, "Food")
        assert store.active_notifications()

        store.set_notifications(enabled=False)
        assert store.active_notifications() == []

        store.set_notifications(enabled=True)
        assert "Food budget exceeded" in store.active_notifications()

    def test_warning_threshold_change_recomputes(self, store):
        store.add_transaction("income", 100000, "Salary")
        store.add_transaction("expense", 120, "Food")
        assert store.active_notifications() == []
        store.set_notifications(budget_warning_pct=50)
        assert store.active_notifications() == ["Food budget warning"]

    def test_set_notifications_with_full_record(self, store, settings):
        result = store.set_notifications(replace(settings, low_balance_abs=0))
        assert result.low_balance_abs == 0
        assert store.notifications == result


class TestPersistence:
    def test_each_mutation_persists_its_key(self, food, thresholds, settings, clock):
        calls = []
        store = BudgetStore(categories=[food], thresholds=thresholds, notifications=settings,
                            persist=lambda key, value: calls.append((key, value)), clock=clock)

        tx = store.add_transaction("expense", 10, "Food")
        store.add_category("Pets", 100)
        store.set_monthly_budget(1)
        store.set_notifications(enabled=False)

        keys = [key for key, _ in calls]
        assert keys == [TRANSACTIONS_KEY, CATEGORIES_KEY, MONTHLY_KEY, NOTIFICATIONS_KEY]
        assert calls[0][1][0]["id"] == tx.id
        assert calls[0][1][0]["date"] == "2026-10-14"
        assert calls[2][1] == 1
        assert calls[3][1]["enabled"] is False

    def test_noop_mutation_does_not_persist(self, food, clock):
        calls = []
        store = BudgetStore(categories=[food], persist=lambda k, v: calls.append(k), clock=clock)
        store.delete_transaction("missing")
        store.delete_category("missing")
        assert calls == []

    def test_persistence_failure_keeps_in_memory_state(self, food, thresholds, settings, clock):
        def failing(key, value):
            raise RuntimeError("database down")

        store = BudgetStore(categories=[food], thresholds=thresholds, notifications=settings,
                            persist=failing, clock=clock)
        with pytest.raises(RuntimeError):
            store.add_transaction("expense", 500, "Food")

        assert len(store.transactions) == 1
        assert "Food budget exceeded" in store.active_notifications()

    def test_state_round_trip(self, store, clock):
        store.add_transaction("expense", 170, "Food", "Groceries", date(2026, 10, 3))
        store.add_transaction("income", 100, "Salary")
        store.add_category("Pets", 0, "#F97316", "PawPrint")
        store.set_daily_budget(10)

        state = store.to_state()
        assert set(state) == set(STATE_KEYS)

        restored = BudgetStore.from_state(state, clock=clock)
        assert restored.derive() == store.derive()
        assert restored.transactions == store.transactions
        assert restored.active_notifications() == store.active_notifications()

    def test_empty_state_uses_defaults(self, clock):
        store = BudgetStore.from_state({}, clock=clock)
        assert store.categories == DEFAULT_CATEGORIES
        assert store.thresholds == BudgetThresholds()
        assert store.transactions == ()

    def test_empty_category_list_is_respected(self, clock):
        store = BudgetStore.from_state({CATEGORIES_KEY: []}, clock=clock)
        assert store.categories == ()
