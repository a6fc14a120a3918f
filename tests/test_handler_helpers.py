import pytest

from handlers.common import parse_amount, split_fields, with_alerts
from handlers.export_handler import _parse_period
from services.budget_store import BudgetStore


@pytest.mark.parametrize("raw, expected", [("100", 100.0), ("1,250.50", 1250.5), (" 0 ", 0.0)])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["-5", "abc", "nan", "inf", ""])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)


def test_split_fields():
    args = ["Food", "&", "Dining;", "15000;", "#EF4444"]
    assert split_fields(args) == ["Food & Dining", "15000", "#EF4444"]


def test_parse_period():
    assert _parse_period([]) is None
    assert _parse_period(["2026", "3"]) == (2026, 3)
    with pytest.raises(ValueError):
        _parse_period(["2026", "13"])


def test_with_alerts(food, thresholds, settings, clock):
    store = BudgetStore(categories=[food], thresholds=thresholds,
                        notifications=settings, clock=clock)
    store.add_transaction("income", 100000, "Salary")
    assert with_alerts("Saved.", store) == "Saved."

    store.add_transaction("expense", 300, "Food")
    assert with_alerts("Saved.", store) == "Saved.\n\n🔔 Food budget exceeded"
