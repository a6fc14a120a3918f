"""
services/period_aggregator.py
-----------------------------
Expense totals over the rolling month / week / day windows.

Window boundaries and transaction dates are both compared as local
calendar dates. ``now`` is interpreted in local time: an aware datetime
is converted to the local zone before its date is taken.
"""

from datetime import date, datetime, timedelta
from typing import Iterable

from models.budget import CurrentSpending
from models.transaction import Transaction


def _local_date(now: datetime) -> date:
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone()
        return now.date()
    return now


def month_start(now: datetime) -> date:
    """First calendar day of ``now``'s month."""
    today = _local_date(now)
    return today.replace(day=1)


def week_start(now: datetime) -> date:
    """
    Most recent Sunday on or before ``now``'s date.

    Sunday is weekday index 0, so the window can begin in the previous
    month (or year).
    """
    today = _local_date(now)
    return today - timedelta(days=today.isoweekday() % 7)


def day_start(now: datetime) -> date:
    return _local_date(now)


def window_starts(now: datetime) -> tuple[date, date, date]:
    """Return ``(month_start, week_start, day_start)`` for ``now``."""
    return month_start(now), week_start(now), day_start(now)


def spent_since(transactions: Iterable[Transaction], start: date) -> float:
    """Sum of expense amounts dated on or after ``start``."""
    return sum(t.amount for t in transactions if t.is_expense() and t.date >= start)


def current_spending(transactions: Iterable[Transaction], now: datetime) -> CurrentSpending:
    """
    Compute the expense totals of the three windows anchored at ``now``.

    Args:
        transactions: Snapshot of the transaction log.
        now: Current local instant.

    Returns:
        CurrentSpending with the monthly, weekly and daily totals.
    """
    transactions = tuple(transactions)
    m_start, w_start, d_start = window_starts(now)
    return CurrentSpending(
        monthly=spent_since(transactions, m_start),
        weekly=spent_since(transactions, w_start),
        daily=spent_since(transactions, d_start),
    )
