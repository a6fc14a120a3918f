from datetime import date, datetime

import pytest

from models.budget import BudgetCategory, BudgetThresholds, NotificationSettings
from models.transaction import Transaction

# Wednesday; the week window starts on Sunday 2026-10-11.
NOW = datetime(2026, 10, 14, 15, 30)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def settings():
    return NotificationSettings(
        budget_warning_pct=80, low_balance_abs=2500, irregular_expense_pct=150, enabled=True,
    )


@pytest.fixture
def thresholds():
    return BudgetThresholds(monthly=80000, weekly=20000, daily=2500)


@pytest.fixture
def make_tx():
    counter = {"n": 0}

    def _make(type, amount, category="Food", on=date(2026, 10, 14), description=""):
        counter["n"] += 1
        return Transaction(
            id=f"t{counter['n']}",
            type=type,
            amount=amount,
            category=category,
            description=description,
            date=on,
            created_at=NOW,
        )

    return _make


@pytest.fixture
def food():
    return BudgetCategory(id="c1", name="Food", limit=200)


class FakeStateRepository:
    """In-memory stand-in for StateRepository."""

    def __init__(self, initial=None):
        self.data = {}
        for user_id, state in (initial or {}).items():
            self.data[user_id] = dict(state)
        self.saves = []

    def load_all(self, user_id):
        return dict(self.data.get(user_id, {}))

    def save(self, user_id, key, value):
        self.saves.append((user_id, key))
        self.data.setdefault(user_id, {})[key] = value

    def delete_all(self, user_id):
        return len(self.data.pop(user_id, {}))


@pytest.fixture
def fake_repo():
    return FakeStateRepository()


class FakeUserRepository:
    """In-memory stand-in for UserRepository."""

    def __init__(self):
        self.registered = []

    def ensure_user(self, telegram_id, first_name=None):
        self.registered.append(telegram_id)
        return {"id": len(self.registered), "telegram_id": telegram_id, "first_name": first_name}

    def list_telegram_ids(self):
        return list(dict.fromkeys(self.registered))


@pytest.fixture
def fake_users():
    return FakeUserRepository()
