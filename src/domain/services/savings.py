"""Monthly savings history: snapshot planning and performance rows."""

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal

from src.domain.models.history import (
    MonthlySavingsSnapshot,
    MonthPerformance,
    SavingsHistory,
)
from src.domain.models.ledger import Transaction, TransactionKind
from src.domain.models.preferences import BudgetPreferences
from src.domain.services.period_calendar import PeriodCalendar


_ZERO = Decimal("0")
_ONE = Decimal("1")


def group_by_month(
    transactions: Iterable[Transaction],
    calendar: PeriodCalendar,
) -> dict[datetime, list[Transaction]]:
    """Group transactions by the first day of their calendar month."""
    months: dict[datetime, list[Transaction]] = {}
    for transaction in transactions:
        key = calendar.start_of_calendar_month(transaction.date)
        months.setdefault(key, []).append(transaction)
    return months


def month_expenses(transactions: Iterable[Transaction]) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.kind is TransactionKind.EXPENSE),
        _ZERO,
    )


def snapshot_rate(preferences: BudgetPreferences, rate: Decimal) -> Decimal:
    """Rate recorded on history rows: the live rate under dual currency."""
    return rate if preferences.has_dual_currency else _ONE


def plan_monthly_snapshots(
    preferences: BudgetPreferences,
    rate: Decimal,
    transactions: Sequence[Transaction],
    existing: Sequence[MonthlySavingsSnapshot],
    now: datetime,
    calendar: PeriodCalendar,
) -> list[MonthlySavingsSnapshot]:
    """Build snapshots for closed calendar months with expenses and none yet.

    The live rate stands in for the historical rate of each closed month;
    no historical rate lookup is attempted.

    Args:
        preferences: Current budget preferences.
        rate: Live conversion rate, budget to spending currency.
        transactions: All transactions.
        existing: Snapshots already stored.
        now: Current instant; its month is never snapshotted.
        calendar: Period calendar supplying the zone for calendar months.

    Returns:
        list[MonthlySavingsSnapshot]: New snapshots, oldest month first.
    """
    if preferences.monthly_envelope <= 0:
        return []
    existing_months = {
        calendar.start_of_calendar_month(snapshot.month_start)
        for snapshot in existing
    }
    current_month = calendar.start_of_calendar_month(now)
    frozen_rate = snapshot_rate(preferences, rate)

    snapshots = []
    for month_start, month_txs in sorted(
        group_by_month(transactions, calendar).items()
    ):
        if month_start in existing_months or month_start == current_month:
            continue
        expenses = month_expenses(month_txs)
        if expenses <= 0:
            continue
        snapshots.append(
            MonthlySavingsSnapshot(
                month_start=month_start,
                month_end=calendar.end_of_calendar_month(month_start),
                budget_amount=preferences.monthly_envelope,
                spent_amount=expenses,
                exchange_rate=frozen_rate,
                budget_currency_code=preferences.effective_budget_currency_code,
                spending_currency_code=preferences.currency_code,
                created_at=now,
            )
        )
    return snapshots


def build_savings_history(
    preferences: BudgetPreferences,
    rate: Decimal,
    transactions: Sequence[Transaction],
    snapshots: Sequence[MonthlySavingsSnapshot],
    now: datetime,
    calendar: PeriodCalendar,
) -> SavingsHistory:
    """Assemble monthly performance rows, newest first.

    The current month is always computed live. Past months are read from
    their snapshot and skipped when none exists.
    """
    history = SavingsHistory(
        months=[],
        spending_currency_code=preferences.currency_code,
        budget_currency_code=preferences.effective_budget_currency_code,
    )
    if preferences.monthly_envelope <= 0:
        return history

    by_month = {
        calendar.start_of_calendar_month(snapshot.month_start): snapshot
        for snapshot in snapshots
    }
    current_month = calendar.start_of_calendar_month(now)
    for month_start, month_txs in sorted(
        group_by_month(transactions, calendar).items(),
        reverse=True,
    ):
        expenses = month_expenses(month_txs)
        if expenses <= 0:
            continue
        if month_start == current_month:
            history.months.append(
                MonthPerformance(
                    month_start=month_start,
                    month_end=calendar.end_of_calendar_month(month_start),
                    budget=preferences.monthly_envelope,
                    spent=expenses,
                    exchange_rate=snapshot_rate(preferences, rate),
                )
            )
            continue
        snapshot = by_month.get(month_start)
        if snapshot is None:
            continue
        history.months.append(
            MonthPerformance(
                month_start=month_start,
                month_end=snapshot.month_end,
                budget=snapshot.budget_amount,
                spent=snapshot.spent_amount,
                exchange_rate=snapshot.exchange_rate,
                snapshot=snapshot,
            )
        )
    return history


__all__ = [
    "group_by_month",
    "month_expenses",
    "snapshot_rate",
    "plan_monthly_snapshots",
    "build_savings_history",
]
