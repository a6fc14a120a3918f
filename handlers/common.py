"""
handlers/common.py
------------------
Objects and helpers shared by every handler module: the per-user store
cache, user registration and argument parsing.
"""

import math

from telegram import Update

from repositories.user_repo import UserRepository
from services.budget_store import BudgetStore
from services.store_manager import StoreManager
from utils.logger import get_logger

logger = get_logger(__name__)

user_repo = UserRepository()
store_manager = StoreManager(users=user_repo)

SAVE_FAILED = (
    "⚠️ The change was applied but could not be saved to the database. "
    "It may be lost when the bot restarts."
)


def get_user_store(update: Update) -> BudgetStore:
    """Load (or reuse) the store of the user behind this update."""
    user = update.effective_user
    return store_manager.get_store(user.id, user.first_name)


def parse_amount(raw: str) -> float:
    """
    Parse a user-typed amount such as ``1,250.50``.

    Raises:
        ValueError: If the text is not a non-negative number.
    """
    amount = float(raw.replace(",", "").strip())
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"invalid amount: {raw!r}")
    return amount


def split_fields(args: list[str]) -> list[str]:
    """Join command arguments and split them on ';'."""
    return [part.strip() for part in " ".join(args).split(";")]


def with_alerts(reply: str, store: BudgetStore) -> str:
    """Append the active alerts (if any) to a reply."""
    alerts = store.active_notifications()
    if not alerts:
        return reply
    return reply + "\n\n🔔 " + "\n🔔 ".join(alerts)
