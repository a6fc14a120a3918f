from datetime import date

import pytest

from models.budget import DEFAULT_CATEGORIES
from services.budget_store import CATEGORIES_KEY, TRANSACTIONS_KEY
from services.store_manager import StoreManager


def test_new_user_gets_defaults(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    store = manager.get_store(42)
    assert store.categories == DEFAULT_CATEGORIES
    assert store.transactions == ()


def test_store_is_cached(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    assert manager.cached(1) is None
    store = manager.get_store(1)
    assert manager.get_store(1) is store
    assert manager.cached(1) is store


def test_mutations_persist_under_the_user(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    manager.get_store(7).add_transaction("expense", 12, "Food", on=date(2026, 10, 1))
    assert fake_repo.saves == [(7, TRANSACTIONS_KEY)]
    assert fake_repo.data[7][TRANSACTIONS_KEY][0]["amount"] == 12


def test_reload_after_evict_restores_state(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    store = manager.get_store(7)
    tx = store.add_transaction("expense", 12, "Food")
    store.add_category("Pets", 300)

    manager.evict(7)
    reloaded = manager.get_store(7)
    assert reloaded is not store
    assert reloaded.transactions == (tx,)
    assert reloaded.find_category("Pets") is not None


def test_users_are_isolated(fake_repo, fake_users, clock):
    fake_repo.data[2] = {CATEGORIES_KEY: []}
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    assert manager.get_store(2).categories == ()
    assert manager.get_store(3).categories == DEFAULT_CATEGORIES


def test_reset_wipes_state(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    manager.get_store(7).add_transaction("income", 5, "Gift")

    store = manager.reset(7)
    assert store.transactions == ()
    assert 7 not in fake_repo.data


def test_first_load_registers_the_user(fake_repo, fake_users, clock):
    manager = StoreManager(fake_repo, fake_users, clock=clock)
    manager.get_store(7, "Asha")
    manager.get_store(7, "Asha")
    assert fake_users.registered == [7]


def test_registration_failure_leaves_nothing_cached(fake_repo, clock):
    class BrokenUsers:
        def ensure_user(self, telegram_id, first_name=None):
            raise RuntimeError("database down")

    manager = StoreManager(fake_repo, BrokenUsers(), clock=clock)
    with pytest.raises(RuntimeError):
        manager.get_store(7)
    assert manager.cached(7) is None
