"""Closing budgeting weeks into immutable log entries.

A week is closed once ``now`` falls after the last day of that week. Each
closed week carries forward its unused allowance to the next one.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from src.domain.models.history import WeeklyLog
from src.domain.models.ledger import (
    Goal,
    GoalPeriod,
    RecurringBill,
    Transaction,
)
from src.domain.models.preferences import BudgetPreferences
from src.domain.services.budget_engine import (
    compute_budget_summary,
    goal_spent_amount,
)
from src.domain.services.period_calendar import PeriodCalendar


_ZERO = Decimal("0")


def is_week_closed(
    week_start: datetime,
    now: datetime,
    calendar: PeriodCalendar,
) -> bool:
    """Return True when ``now`` is past the final day of the week."""
    week_end = calendar.end_of_week(week_start)
    return now > week_start and not calendar.contains(
        now,
        week_start,
        week_end,
    )


def closed_week_starts(
    transactions: Sequence[Transaction],
    now: datetime,
    calendar: PeriodCalendar,
) -> list[datetime]:
    """Starts of every closed week from the first transaction's week on."""
    if not transactions:
        return []
    earliest = min(t.date for t in transactions)
    week_start = calendar.start_of_week(earliest)
    starts = []
    while is_week_closed(week_start, now, calendar):
        starts.append(week_start)
        week_start = calendar.add_days(week_start, 7)
    return starts


def goals_with_leftover(
    goals: Sequence[Goal],
    transactions: Sequence[Transaction],
    week_start: datetime,
    week_end: datetime,
    calendar: PeriodCalendar,
) -> int:
    """Count weekly goals that ended the week under their limit."""
    count = 0
    for goal in goals:
        if goal.period is not GoalPeriod.WEEKLY:
            continue
        spent = goal_spent_amount(
            goal,
            transactions,
            week_start,
            week_end,
            calendar,
        )
        if spent < goal.spending_limit:
            count += 1
    return count


def plan_weekly_logs(
    preferences: BudgetPreferences,
    rate: Decimal,
    active_bills: Sequence[RecurringBill],
    goals: Sequence[Goal],
    transactions: Sequence[Transaction],
    existing: Sequence[WeeklyLog],
    now: datetime,
    calendar: PeriodCalendar,
) -> list[WeeklyLog]:
    """Build log entries for closed weeks that have no log yet.

    Args:
        preferences: Current budget preferences.
        rate: Live conversion rate, budget to spending currency.
        active_bills: Recurring bills that are active.
        goals: All goals.
        transactions: All transactions.
        existing: Logs already stored.
        now: Current instant; the open week is never logged.
        calendar: Period calendar defining week boundaries.

    Returns:
        list[WeeklyLog]: New log entries, oldest week first.
    """
    logged = {
        calendar.start_of_week(log.week_start): log for log in existing
    }
    new_logs = []
    carried = _ZERO
    for week_start in closed_week_starts(transactions, now, calendar):
        previous = logged.get(week_start)
        if previous is not None:
            carried = previous.unused_rolled_forward
            continue
        week_end = calendar.end_of_week(week_start)
        summary = compute_budget_summary(
            preferences,
            rate,
            active_bills,
            goals,
            transactions,
            week_end,
            calendar,
        )
        total_available = summary.weekly_allowance + carried
        unused = max(
            _ZERO,
            total_available - summary.weekly_discretionary_spent,
        )
        log = WeeklyLog(
            week_start=week_start,
            week_end=week_end,
            total_available=total_available,
            rolled_over_amount=carried,
            unused_rolled_forward=unused,
            goals_with_leftover=goals_with_leftover(
                goals,
                transactions,
                week_start,
                week_end,
                calendar,
            ),
            currency_code=preferences.currency_code,
            created_at=now,
        )
        new_logs.append(log)
        logged[week_start] = log
        carried = unused
    return new_logs


__all__ = [
    "is_week_closed",
    "closed_week_starts",
    "goals_with_leftover",
    "plan_weekly_logs",
]
