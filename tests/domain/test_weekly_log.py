"""Tests for closing weeks into the weekly log."""

from datetime import datetime, timezone
from decimal import Decimal

from src.domain.models.history import WeeklyLog
from src.domain.models.ledger import (
    CategorySnapshot,
    Goal,
    GoalPeriod,
    Transaction,
    TransactionKind,
)
from src.domain.models.preferences import BudgetPreferences
from src.domain.services.period_calendar import PeriodCalendar
from src.domain.services.weekly_log import (
    closed_week_starts,
    goals_with_leftover,
    is_week_closed,
    plan_weekly_logs,
)


UTC = timezone.utc
NOW = datetime(2025, 2, 17, 9, 0, tzinfo=UTC)
CALENDAR = PeriodCalendar()
PREFERENCES = BudgetPreferences(monthly_envelope=Decimal("400"))


def _expense(amount, day, category="Misc"):
    return Transaction(
        title="Item",
        amount=Decimal(amount),
        kind=TransactionKind.EXPENSE,
        date=datetime(2025, 2, day, 10, 0, tzinfo=UTC),
        category=CategorySnapshot(name=category),
    )


def _week(day):
    return datetime(2025, 2, day, tzinfo=UTC)


def test_week_closes_once_its_last_day_has_passed() -> None:
    start = _week(2)

    assert not is_week_closed(start, _week(5), CALENDAR)
    assert not is_week_closed(
        start, datetime(2025, 2, 8, 23, 59, tzinfo=UTC), CALENDAR
    )
    assert is_week_closed(start, _week(9), CALENDAR)
    assert not is_week_closed(start, _week(1), CALENDAR)


def test_closed_weeks_run_from_first_transaction_to_last_week() -> None:
    starts = closed_week_starts([_expense("5", 3)], NOW, CALENDAR)

    assert starts == [_week(2), _week(9)]
    assert closed_week_starts([], NOW, CALENDAR) == []


def test_closed_weeks_stop_at_the_week_still_open() -> None:
    """The last moment of a week keeps it open; future weeks never close."""
    last_minute = datetime(2025, 2, 15, 23, 59, tzinfo=UTC)

    assert closed_week_starts([_expense("5", 3)], last_minute, CALENDAR) == [
        _week(2)
    ]
    assert closed_week_starts([_expense("5", 20)], NOW, CALENDAR) == []


def test_unused_allowance_rolls_forward() -> None:
    transactions = [_expense("30", 3), _expense("150", 10)]

    logs = plan_weekly_logs(
        PREFERENCES, Decimal("1"), [], [], transactions, [], NOW, CALENDAR
    )

    first, second = logs
    assert first.week_start == _week(2)
    assert first.week_end == _week(8)
    assert first.total_available == Decimal("100")
    assert first.rolled_over_amount == Decimal("0")
    assert first.unused_rolled_forward == Decimal("70")

    assert second.rolled_over_amount == Decimal("70")
    assert second.total_available == Decimal("170")
    assert second.unused_rolled_forward == Decimal("20")
    assert second.currency_code == "USD"
    assert second.created_at == NOW


def test_overspent_week_rolls_nothing_forward() -> None:
    transactions = [_expense("130", 3), _expense("10", 10)]

    logs = plan_weekly_logs(
        PREFERENCES, Decimal("1"), [], [], transactions, [], NOW, CALENDAR
    )

    assert logs[0].unused_rolled_forward == Decimal("0")
    assert logs[1].rolled_over_amount == Decimal("0")
    assert logs[1].unused_rolled_forward == Decimal("90")


def test_existing_logs_are_kept_and_chain_the_rollover() -> None:
    existing = WeeklyLog(
        week_start=_week(2),
        week_end=_week(8),
        total_available=Decimal("100"),
        rolled_over_amount=Decimal("0"),
        unused_rolled_forward=Decimal("50"),
        goals_with_leftover=0,
        currency_code="USD",
        created_at=_week(9),
    )

    logs = plan_weekly_logs(
        PREFERENCES,
        Decimal("1"),
        [],
        [],
        [_expense("30", 3), _expense("150", 10)],
        [existing],
        NOW,
        CALENDAR,
    )

    assert len(logs) == 1
    assert logs[0].week_start == _week(9)
    assert logs[0].rolled_over_amount == Decimal("50")
    assert logs[0].total_available == Decimal("150")
    assert logs[0].unused_rolled_forward == Decimal("0")


def test_goals_with_leftover_counts_weekly_goals_under_limit() -> None:
    goals = [
        Goal(category_name="Gas", spending_limit=Decimal("40"),
             period=GoalPeriod.WEEKLY),
        Goal(category_name="Dining", spending_limit=Decimal("20"),
             period=GoalPeriod.WEEKLY),
        Goal(category_name="Books", spending_limit=Decimal("500")),
    ]
    transactions = [
        _expense("15", 3, category="Gas"),
        _expense("25", 4, category="Dining"),
    ]

    count = goals_with_leftover(
        goals, transactions, _week(2), _week(8), CALENDAR
    )

    assert count == 1
