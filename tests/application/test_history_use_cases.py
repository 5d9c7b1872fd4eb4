"""Tests for the monthly savings and weekly log use cases."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.monthly_savings import (
    GetMonthlySavingsUseCase,
    SyncMonthlySnapshotsUseCase,
    SyncSnapshotsResult,
)
from src.application.use_cases.weekly_log import (
    CloseWeeksResult,
    CloseWeeksUseCase,
    GetWeeklyLogsUseCase,
)
from src.domain.models.history import WeeklyLog
from src.domain.models.ledger import (
    CategorySnapshot,
    Transaction,
    TransactionKind,
)
from src.domain.models.preferences import BudgetPreferences


NOW = datetime(2025, 2, 17, 9, 0, tzinfo=timezone.utc)


def _expense(amount: str, month: int, day: int) -> Transaction:
    return Transaction(
        title="Groceries",
        amount=Decimal(amount),
        kind=TransactionKind.EXPENSE,
        date=datetime(2025, month, day, 10, 0, tzinfo=timezone.utc),
        category=CategorySnapshot(name="Groceries"),
    )


def _repositories(envelope: str, transactions: list[Transaction]):
    transactions_repository = MagicMock()
    transactions_repository.fetch_transactions.return_value = transactions
    preferences_repository = MagicMock()
    preferences_repository.load_preferences.return_value = BudgetPreferences(
        monthly_envelope=Decimal(envelope),
    )
    conversion_cache = MagicMock()
    conversion_cache.rate_for.return_value = Decimal("1")
    return transactions_repository, preferences_repository, conversion_cache


def test_sync_snapshots_writes_closed_months() -> None:
    """January has expenses and no snapshot, so it is frozen."""
    transactions_repository, preferences_repository, conversion_cache = (
        _repositories("1000", [_expense("300", 1, 10), _expense("80", 2, 3)])
    )
    snapshots_repository = MagicMock()
    snapshots_repository.fetch_snapshots.return_value = []
    snapshots_repository.add_snapshots.return_value = 1
    use_case = SyncMonthlySnapshotsUseCase(
        transactions_repository,
        snapshots_repository,
        preferences_repository,
        conversion_cache,
        logger=MagicMock(),
    )

    result = use_case.run(now=NOW)

    assert result == SyncSnapshotsResult(existing_count=0, created_count=1)
    (snapshots,), _ = snapshots_repository.add_snapshots.call_args
    assert [s.month_start.month for s in snapshots] == [1]
    assert snapshots[0].spent_amount == Decimal("300")


def test_sync_snapshots_without_envelope_does_nothing() -> None:
    transactions_repository, preferences_repository, conversion_cache = (
        _repositories("0", [_expense("300", 1, 10)])
    )
    snapshots_repository = MagicMock()
    snapshots_repository.fetch_snapshots.return_value = []
    use_case = SyncMonthlySnapshotsUseCase(
        transactions_repository,
        snapshots_repository,
        preferences_repository,
        conversion_cache,
        logger=MagicMock(),
    )

    result = use_case.run(now=NOW)

    assert result.created_count == 0
    snapshots_repository.add_snapshots.assert_not_called()
    transactions_repository.fetch_transactions.assert_not_called()


def test_monthly_savings_history_includes_live_month() -> None:
    transactions_repository, preferences_repository, conversion_cache = (
        _repositories("1000", [_expense("80", 2, 3)])
    )
    snapshots_repository = MagicMock()
    snapshots_repository.fetch_snapshots.return_value = []
    use_case = GetMonthlySavingsUseCase(
        transactions_repository,
        snapshots_repository,
        preferences_repository,
        conversion_cache,
        logger=MagicMock(),
    )

    history = use_case.execute(now=NOW)

    assert len(history.months) == 1
    assert history.months[0].is_live
    assert history.months[0].savings_in_spending == Decimal("920")


def test_close_weeks_logs_each_closed_week() -> None:
    """Weeks of Feb 2 and Feb 9 are closed on Monday Feb 17."""
    transactions_repository, preferences_repository, conversion_cache = (
        _repositories("400", [_expense("30", 2, 3), _expense("150", 2, 10)])
    )
    bills_repository = MagicMock()
    bills_repository.fetch_recurring_bills.return_value = []
    goals_repository = MagicMock()
    goals_repository.fetch_goals.return_value = []
    logs_repository = MagicMock()
    logs_repository.fetch_weekly_logs.return_value = []
    logs_repository.add_weekly_logs.return_value = 2
    use_case = CloseWeeksUseCase(
        transactions_repository,
        bills_repository,
        goals_repository,
        logs_repository,
        preferences_repository,
        conversion_cache,
        logger=MagicMock(),
    )

    result = use_case.run(now=NOW)

    assert result == CloseWeeksResult(existing_count=0, created_count=2)
    (logs,), _ = logs_repository.add_weekly_logs.call_args
    assert [log.unused_rolled_forward for log in logs] == [
        Decimal("70"),
        Decimal("20"),
    ]
    bills_repository.fetch_recurring_bills.assert_called_once_with(
        active_only=True
    )


def test_weekly_logs_are_returned_newest_first() -> None:
    def _log(day: int) -> WeeklyLog:
        start = datetime(2025, 2, day, tzinfo=timezone.utc)
        return WeeklyLog(
            week_start=start,
            week_end=start,
            total_available=Decimal("100"),
            rolled_over_amount=Decimal("0"),
            unused_rolled_forward=Decimal("0"),
            goals_with_leftover=0,
            currency_code="USD",
            created_at=NOW,
        )

    logs_repository = MagicMock()
    logs_repository.fetch_weekly_logs.return_value = [_log(2), _log(9)]

    logs = GetWeeklyLogsUseCase(logs_repository).execute()

    assert [log.week_start.day for log in logs] == [9, 2]
