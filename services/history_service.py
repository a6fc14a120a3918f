"""
services/history_service.py
---------------------------
Search, filter and sort the transaction history.
"""

from typing import Iterable

from models.transaction import EXPENSE, INCOME, Transaction
from utils.errors import InvalidInputError

TYPE_FILTERS = ("all", INCOME, EXPENSE)
SORT_KEYS = ("date", "amount")


def filter_transactions(
    transactions: Iterable[Transaction],
    search: str = "",
    type_filter: str = "all",
    sort_by: str = "date",
) -> list[Transaction]:
    """
    Return the matching transactions, newest (or largest) first.

    Args:
        transactions: Log snapshot in creation order.
        search: Case-insensitive substring matched against the
            description or the category label.
        type_filter: 'all', 'income' or 'expense'.
        sort_by: 'date' (newest date first, later-created first on ties)
            or 'amount' (largest first, later-created first on ties).

    Raises:
        InvalidInputError: On an unknown type filter or sort key.
    """
    if type_filter not in TYPE_FILTERS:
        raise InvalidInputError("type_filter", type_filter, f"expected one of {TYPE_FILTERS}")
    if sort_by not in SORT_KEYS:
        raise InvalidInputError("sort_by", sort_by, f"expected one of {SORT_KEYS}")

    needle = search.strip().lower()
    matches = [
        (position, t)
        for position, t in enumerate(transactions)
        if (type_filter == "all" or t.type == type_filter)
        and (not needle or needle in t.description.lower() or needle in t.category.lower())
    ]

    if sort_by == "date":
        matches.sort(key=lambda item: (item[1].date, item[0]), reverse=True)
    else:
        matches.sort(key=lambda item: (item[1].amount, item[0]), reverse=True)
    return [t for _, t in matches]
