from datetime import date, datetime

import pytest

from services.transaction_log import TransactionLog
from utils.errors import InvalidInputError


@pytest.fixture
def log(clock):
    return TransactionLog(clock=clock)


def test_append_assigns_id_and_creation_instant(log, now):
    tx = log.append("expense", 100, "Food", "Lunch", date(2026, 10, 10))
    assert tx.id
    assert tx.created_at == now
    assert tx.date == date(2026, 10, 10)
    assert log.get(tx.id) == tx


def test_append_defaults_to_clock_date(log, now):
    assert log.append("income", 5, "Gift").date == now.date()


def test_append_accepts_iso_strings_and_normalises_type(log):
    tx = log.append("Expense", 10, "Food", on="2026-10-01")
    assert tx.type == "expense"
    assert tx.date == date(2026, 10, 1)


def test_append_rejects_malformed_date(log):
    with pytest.raises(InvalidInputError):
        log.append("expense", 10, "Food", on="2026-13-45")
    assert len(log) == 0


def test_append_rejects_unknown_type(log):
    with pytest.raises(InvalidInputError):
        log.append("transfer", 10, "Food")


def test_ids_are_unique(log):
    ids = {log.append("expense", 1, "Food").id for _ in range(200)}
    assert len(ids) == 200


def test_keeps_creation_order(log):
    first = log.append("expense", 1, "A")
    second = log.append("expense", 2, "B")
    assert log.snapshot() == (first, second)


def test_delete(log):
    tx = log.append("expense", 1, "A")
    assert log.delete(tx.id) is True
    assert log.delete(tx.id) is False
    assert log.snapshot() == ()


def test_snapshot_is_immutable_view(log):
    log.append("expense", 1, "A")
    snap = log.snapshot()
    log.append("expense", 2, "B")
    assert len(snap) == 1
    assert len(log) == 2


def test_created_at_follows_clock():
    ticks = iter([datetime(2026, 1, 1, 8), datetime(2026, 1, 1, 9)])
    log = TransactionLog(clock=lambda: next(ticks))
    a = log.append("expense", 1, "A")
    b = log.append("expense", 1, "A")
    assert a.created_at < b.created_at
