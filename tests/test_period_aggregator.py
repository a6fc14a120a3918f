from datetime import date, datetime, timedelta, timezone

from services.period_aggregator import current_spending, week_start, window_starts


class TestWindowStarts:
    def test_midweek(self, now):
        assert window_starts(now) == (date(2026, 10, 1), date(2026, 10, 11), date(2026, 10, 14))

    def test_sunday_starts_its_own_week(self):
        sunday = datetime(2026, 10, 18, 23, 59)
        assert week_start(sunday) == date(2026, 10, 18)

    def test_saturday_goes_back_six_days(self):
        saturday = datetime(2026, 10, 17, 0, 1)
        assert week_start(saturday) == date(2026, 10, 11)

    def test_week_can_start_in_previous_month(self):
        friday = datetime(2026, 10, 2, 9, 0)
        month, week, day = window_starts(friday)
        assert month == date(2026, 10, 1)
        assert week == date(2026, 9, 27)
        assert day == date(2026, 10, 2)

    def test_week_can_start_in_previous_year(self):
        assert week_start(datetime(2027, 1, 1, 12, 0)) == date(2026, 12, 27)

    def test_aware_datetime_uses_local_calendar_date(self):
        aware = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)
        local_day = aware.astimezone().date()
        assert window_starts(aware)[2] == local_day


class TestCurrentSpending:
    def test_only_expenses_counted(self, now, make_tx):
        txs = [make_tx("expense", 100), make_tx("income", 5000)]
        spending = current_spending(txs, now)
        assert spending.monthly == 100
        assert spending.weekly == 100
        assert spending.daily == 100

    def test_window_boundaries_are_inclusive(self, now, make_tx):
        txs = [
            make_tx("expense", 1, on=date(2026, 10, 1)),   # month start
            make_tx("expense", 10, on=date(2026, 10, 11)),  # week start
            make_tx("expense", 100, on=date(2026, 10, 14)),  # today
            make_tx("expense", 1000, on=date(2026, 9, 30)),  # before every window
        ]
        spending = current_spending(txs, now)
        assert spending.monthly == 111
        assert spending.weekly == 110
        assert spending.daily == 100

    def test_previous_month_days_count_towards_week_only(self, make_tx):
        friday = datetime(2026, 10, 2, 9, 0)
        txs = [make_tx("expense", 40, on=date(2026, 9, 28))]
        spending = current_spending(txs, friday)
        assert spending.weekly == 40
        assert spending.monthly == 0
        assert spending.daily == 0

    def test_future_dated_expense_counts(self, now, make_tx):
        txs = [make_tx("expense", 25, on=now.date() + timedelta(days=3))]
        spending = current_spending(txs, now)
        assert (spending.monthly, spending.weekly, spending.daily) == (25, 25, 25)

    def test_empty_log(self, now):
        spending = current_spending([], now)
        assert (spending.monthly, spending.weekly, spending.daily) == (0, 0, 0)
