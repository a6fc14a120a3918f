from models.budget import BudgetCategory
from services.budget_deriver import category_spent, derive


def _derive(transactions, categories, settings):
    return derive(transactions, categories, 80000, 20000, 2500, settings)


def test_totals_and_balance(make_tx, food, settings):
    txs = [make_tx("income", 1000), make_tx("expense", 2500), make_tx("expense", 0)]
    snapshot = _derive(txs, [food], settings)

    assert snapshot.total_income == 1000
    assert snapshot.total_expenses == 2500
    assert snapshot.balance == -1500
    assert snapshot.total_income - snapshot.total_expenses == snapshot.balance


def test_thresholds_and_settings_pass_through(food, settings):
    snapshot = derive([], [food], 1, 2, 3, settings)
    assert (snapshot.monthly_budget, snapshot.weekly_budget, snapshot.daily_budget) == (1, 2, 3)
    assert snapshot.notifications is settings
    assert snapshot.goals == ()


def test_category_spent_matches_name_exactly(make_tx, settings):
    categories = [
        BudgetCategory(id="a", name="Food", limit=200),
        BudgetCategory(id="b", name="food", limit=200),
    ]
    txs = [
        make_tx("expense", 100, "Food"),
        make_tx("expense", 50, "Food"),
        make_tx("expense", 7, "food"),
        make_tx("expense", 3, "Food "),
        make_tx("income", 900, "Food"),
    ]
    snapshot = _derive(txs, categories, settings)

    assert snapshot.category("Food").spent == 150
    assert snapshot.category("food").spent == 7


def test_stale_spent_value_is_ignored(make_tx, settings):
    stale = BudgetCategory(id="a", name="Food", limit=200, spent=9999)
    snapshot = _derive([make_tx("expense", 10)], [stale], settings)
    assert snapshot.categories[0].spent == 10


def test_spent_can_exceed_limit(make_tx, food, settings):
    snapshot = _derive([make_tx("expense", 500)], [food], settings)
    assert snapshot.categories[0].spent == 500
    assert snapshot.categories[0].limit == 200


def test_orphaned_transactions_still_count_in_totals(make_tx, food, settings):
    txs = [make_tx("expense", 10, "Food"), make_tx("expense", 40, "Groceries")]
    snapshot = _derive(txs, [food], settings)
    assert snapshot.total_expenses == 50
    assert sum(c.spent for c in snapshot.categories) == 10


def test_category_order_is_preserved(settings):
    categories = [BudgetCategory(id=str(i), name=f"C{i}", limit=10) for i in range(5)]
    snapshot = _derive([], categories, settings)
    assert [c.name for c in snapshot.categories] == ["C0", "C1", "C2", "C3", "C4"]


def test_derive_is_deterministic(make_tx, food, settings):
    txs = [make_tx("expense", 12.3), make_tx("income", 45.6)]
    assert _derive(txs, [food], settings) == _derive(txs, [food], settings)


def test_category_spent_helper(make_tx):
    txs = [make_tx("expense", 1, "X"), make_tx("expense", 2, "Y"), make_tx("income", 4, "X")]
    assert category_spent(txs, "X") == 1
    assert category_spent(txs, "Z") == 0
