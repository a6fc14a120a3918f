"""
services/store_manager.py
-------------------------
Keeps one BudgetStore per Telegram user, loaded lazily from the
state repository and wired to persist back into it.
"""

from datetime import datetime
from functools import partial
from typing import Callable, Optional

from services.budget_store import BudgetStore
from utils.logger import get_logger

logger = get_logger(__name__)


class StoreManager:
    """
    Per-user cache of BudgetStore instances.

    Args:
        repository: Object exposing ``load_all(user_id)``,
            ``save(user_id, key, value)`` and ``delete_all(user_id)``;
            defaults to StateRepository.
        users: Object exposing ``ensure_user(telegram_id, first_name)``;
            defaults to UserRepository.
        clock: Clock handed to every store.
    """

    def __init__(self, repository=None, users=None,
                 clock: Callable[[], datetime] = datetime.now):
        if repository is None:
            from repositories.state_repo import StateRepository
            repository = StateRepository()
        if users is None:
            from repositories.user_repo import UserRepository
            users = UserRepository()
        self.repository = repository
        self.users = users
        self._clock = clock
        self._stores: dict[int, BudgetStore] = {}

    def get_store(self, user_id: int, first_name: Optional[str] = None) -> BudgetStore:
        """
        Return the cached store for a user, loading it on first use.

        Loading registers the user first: budget_state rows reference
        users, so every path that creates a store must go through here.
        """
        store = self._stores.get(user_id)
        if store is None:
            self.users.ensure_user(user_id, first_name)
            state = self.repository.load_all(user_id)
            store = BudgetStore.from_state(
                state,
                persist=partial(self.repository.save, user_id),
                clock=self._clock,
            )
            self._stores[user_id] = store
            logger.info(
                f"Loaded budget store for user {user_id} "
                f"({len(store.transactions)} transactions, {len(store.categories)} categories)"
            )
        return store

    def cached(self, user_id: int) -> Optional[BudgetStore]:
        return self._stores.get(user_id)

    def evict(self, user_id: int) -> None:
        """Drop a user's store so the next access reloads it."""
        self._stores.pop(user_id, None)

    def reset(self, user_id: int, first_name: Optional[str] = None) -> BudgetStore:
        """Wipe a user's persisted state and start again from defaults."""
        self.repository.delete_all(user_id)
        self.evict(user_id)
        return self.get_store(user_id, first_name)
