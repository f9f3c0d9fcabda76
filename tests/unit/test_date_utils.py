"""Unit tests for settlement horizon calculation"""

from datetime import date, datetime, timedelta, timezone

from airdrop_estimator.utils.date_utils import remaining_days, start_of_day


def test_start_of_day():
    assert start_of_day(datetime(2025, 9, 20, 15, 30)) == datetime(2025, 9, 20)


def test_remaining_days_counts_from_start_of_today():
    """Time of day does not matter for a date settlement"""
    settlement = date(2025, 9, 24)
    assert remaining_days(settlement, datetime(2025, 9, 20, 0, 0)) == 4
    assert remaining_days(settlement, datetime(2025, 9, 20, 23, 59)) == 4


def test_remaining_days_partial_day_rounds_up():
    settlement = datetime(2025, 9, 24, 12, 0)
    assert remaining_days(settlement, datetime(2025, 9, 23, 8, 0)) == 2


def test_remaining_days_floors_at_zero():
    settlement = date(2025, 9, 24)
    assert remaining_days(settlement, datetime(2025, 9, 24, 10, 0)) == 0
    assert remaining_days(settlement, datetime(2025, 10, 19)) == 0


def test_remaining_days_aware_settlement_without_now():
    """Default now follows the settlement's timezone"""
    settlement = datetime.now(timezone.utc) + timedelta(days=3)
    assert remaining_days(settlement) in (3, 4)


def test_remaining_days_aware_now_with_date_settlement():
    now = datetime(2025, 9, 20, 18, 0, tzinfo=timezone.utc)
    assert remaining_days(date(2025, 9, 24), now) == 4
