"""Budget arithmetic shared by the dashboard, the widget and history views.

Every figure is derived from the inputs passed in; nothing is cached, so the
functions can be called repeatedly from any read-only context.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal

from src.domain.constants import AT_RISK_RATIO
from src.domain.models.budget import BudgetSummary, GoalProgress, WidgetSummary
from src.domain.models.ledger import (
    Goal,
    GoalPeriod,
    RecurringBill,
    Transaction,
    TransactionKind,
)
from src.domain.models.preferences import BudgetPreferences, WidgetDefaults
from src.domain.services.period_calendar import PeriodCalendar


_ZERO = Decimal("0")
_ONE = Decimal("1")


def envelope_in_spending_currency(
    monthly_envelope: Decimal,
    rate: Decimal,
    has_dual_currency: bool,
) -> Decimal:
    """Convert the monthly envelope into spending currency.

    Rates below 1 are raised to 1 before multiplying.

    Args:
        monthly_envelope: Envelope in budget currency.
        rate: Units of spending currency per unit of budget currency.
        has_dual_currency: Whether budget and spending currencies differ.

    Returns:
        Decimal: Envelope in spending currency.
    """
    effective_rate = max(rate, _ONE) if has_dual_currency else _ONE
    return monthly_envelope * effective_rate


def committed_monthly(bills: Iterable[RecurringBill]) -> Decimal:
    """Sum the monthly equivalents of the given bills."""
    return sum((bill.monthly_equivalent for bill in bills), _ZERO)


def allocated_monthly(goals: Iterable[Goal], weeks_in_month: Decimal) -> Decimal:
    """Sum goal limits, scaling weekly goals by the weeks in the month."""
    total = _ZERO
    for goal in goals:
        if goal.period is GoalPeriod.WEEKLY:
            total += goal.spending_limit * weeks_in_month
        else:
            total += goal.spending_limit
    return total


def discretionary_pool(
    envelope: Decimal,
    committed: Decimal,
    allocated: Decimal,
) -> Decimal:
    """Envelope left after bills and goals, never below zero."""
    return max(_ZERO, envelope - committed - allocated)


def per_week(monthly_amount: Decimal, weeks_in_month: Decimal) -> Decimal:
    """Divide a monthly amount across the weeks, 0 when there are none."""
    if weeks_in_month <= 0:
        return _ZERO
    return monthly_amount / weeks_in_month


def spent_ratio(spent: Decimal, limit: Decimal) -> Decimal:
    """Share of a limit already spent; 0 for non-positive limits."""
    if limit <= 0:
        return _ZERO
    return spent / limit


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), _ZERO)


def discretionary_expenses(
    transactions: Iterable[Transaction],
    goal_category_names: frozenset[str],
    start: datetime,
    end: datetime,
    calendar: PeriodCalendar,
) -> list[Transaction]:
    """Expenses in [start, end] that are neither bill-linked nor goal-tracked.

    Args:
        transactions: Candidate transactions.
        goal_category_names: Categories already tracked by a goal.
        start: Window start.
        end: Window end, inclusive of its whole day.
        calendar: Calendar used for the range check.

    Returns:
        list[Transaction]: Matching expense transactions.
    """
    return [
        t
        for t in transactions
        if t.kind is TransactionKind.EXPENSE
        and t.recurring_bill_id is None
        and t.category_name not in goal_category_names
        and calendar.contains(t.date, start, end)
    ]


def goal_spent_amount(
    goal: Goal,
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
    calendar: PeriodCalendar,
) -> Decimal:
    """Expenses in the goal's category within [start, end]."""
    return sum_amounts(
        t
        for t in transactions
        if t.kind is TransactionKind.EXPENSE
        and t.category_name == goal.category_name
        and calendar.contains(t.date, start, end)
    )


def compute_goal_progress(
    goals: Iterable[Goal],
    transactions: Sequence[Transaction],
    now: datetime,
    calendar: PeriodCalendar,
) -> list[GoalProgress]:
    """Return spending progress for each goal in its current window."""
    progress = []
    for goal in goals:
        start, end = calendar.current_window(goal.period, now)
        spent = goal_spent_amount(goal, transactions, start, end, calendar)
        progress.append(
            GoalProgress(
                goal=goal,
                window_start=start,
                window_end=end,
                spent_amount=spent,
                spent_ratio=spent_ratio(spent, goal.spending_limit),
            )
        )
    return progress


def select_goals_at_risk(
    progress: Iterable[GoalProgress],
    threshold: Decimal = AT_RISK_RATIO,
) -> list[GoalProgress]:
    """Goals at or above the threshold ratio, highest ratio first."""
    at_risk = [item for item in progress if item.spent_ratio >= threshold]
    return sorted(at_risk, key=lambda item: item.spent_ratio, reverse=True)


def compute_budget_summary(
    preferences: BudgetPreferences,
    rate: Decimal,
    active_bills: Sequence[RecurringBill],
    goals: Sequence[Goal],
    transactions: Sequence[Transaction],
    now: datetime,
    calendar: PeriodCalendar | None = None,
) -> BudgetSummary:
    """Derive every weekly and monthly budget figure.

    Args:
        preferences: Current budget preferences.
        rate: Live conversion rate, budget to spending currency.
        active_bills: Recurring bills that are active.
        goals: All goals.
        transactions: All transactions.
        now: Instant the figures are computed for.
        calendar: Period calendar; built from preferences when omitted.

    Returns:
        BudgetSummary: Derived budget figures in spending currency.
    """
    envelope = envelope_in_spending_currency(
        preferences.monthly_envelope,
        rate,
        preferences.has_dual_currency,
    )
    return _summarize(
        envelope,
        preferences.monthly_envelope > 0,
        preferences.currency_code,
        active_bills,
        goals,
        transactions,
        now,
        calendar or PeriodCalendar.from_preferences(preferences),
    )


def compute_widget_summary(
    defaults: WidgetDefaults,
    active_bills: Sequence[RecurringBill],
    goals: Sequence[Goal],
    transactions: Sequence[Transaction],
    now: datetime,
    calendar: PeriodCalendar | None = None,
) -> WidgetSummary:
    """Derive the widget figures through the same arithmetic as the app.

    The mirrored settings carry the rate already chosen by the app (1 when
    no conversion applies), so any rate other than 1 is treated as dual
    currency.

    Args:
        defaults: Settings mirrored into the shared key-value store.
        active_bills: Recurring bills that are active.
        goals: All goals.
        transactions: All transactions.
        now: Instant the figures are computed for.
        calendar: Period calendar; built from the mirrored week start when
            omitted.

    Returns:
        WidgetSummary: Weekly figures, all zero when no envelope is set.
    """
    if defaults.monthly_envelope <= 0:
        return WidgetSummary(
            date=now,
            weekly_available=_ZERO,
            weekly_allowance=_ZERO,
            weekly_spent=_ZERO,
            days_left=0,
            currency_code=defaults.currency_code,
        )
    envelope = envelope_in_spending_currency(
        defaults.monthly_envelope,
        defaults.conversion_rate,
        defaults.conversion_rate != _ONE,
    )
    summary = _summarize(
        envelope,
        True,
        defaults.currency_code,
        active_bills,
        goals,
        transactions,
        now,
        calendar or PeriodCalendar(week_start=defaults.week_start),
    )
    return WidgetSummary(
        date=now,
        weekly_available=summary.weekly_available,
        weekly_allowance=summary.weekly_allowance,
        weekly_spent=summary.weekly_discretionary_spent,
        days_left=summary.days_left_in_week,
        currency_code=defaults.currency_code,
    )


def _summarize(
    envelope: Decimal,
    has_envelope: bool,
    currency_code: str,
    active_bills: Sequence[RecurringBill],
    goals: Sequence[Goal],
    transactions: Sequence[Transaction],
    now: datetime,
    calendar: PeriodCalendar,
) -> BudgetSummary:
    weeks = calendar.weeks_in_month(now)
    committed = committed_monthly(active_bills)
    allocated = allocated_monthly(goals, weeks)
    pool = discretionary_pool(envelope, committed, allocated)

    goal_names = frozenset(goal.category_name for goal in goals)
    week_start = calendar.start_of_week(now)
    week_end = calendar.end_of_week(now)
    weekly_spent = sum_amounts(
        discretionary_expenses(
            transactions,
            goal_names,
            week_start,
            week_end,
            calendar,
        )
    )

    month_transactions = [
        t for t in transactions if calendar.is_same_month(t.date, now)
    ]
    total_income = sum_amounts(
        t for t in month_transactions if t.kind is TransactionKind.INCOME
    )
    total_expenses = sum_amounts(
        t for t in month_transactions if t.kind is TransactionKind.EXPENSE
    )
    monthly_savings = envelope - total_expenses if has_envelope else _ZERO

    progress = compute_goal_progress(goals, transactions, now, calendar)

    return BudgetSummary(
        currency_code=currency_code,
        envelope_in_spending_currency=envelope,
        committed_monthly=committed,
        allocated_monthly=allocated,
        discretionary_pool=pool,
        weeks_in_month=weeks,
        weekly_allowance=per_week(pool, weeks),
        goal_category_names=goal_names,
        week_start=week_start,
        week_end=week_end,
        weekly_discretionary_spent=weekly_spent,
        weekly_envelope=per_week(envelope, weeks),
        weekly_committed=per_week(committed, weeks),
        weekly_goals=per_week(allocated, weeks),
        days_left_in_week=calendar.days_left_in_week(now),
        week_range_label=calendar.week_range_label(now),
        month_transactions=month_transactions,
        total_income=total_income,
        total_expenses=total_expenses,
        monthly_savings=monthly_savings,
        goal_progress=progress,
        goals_at_risk=select_goals_at_risk(progress),
    )


__all__ = [
    "envelope_in_spending_currency",
    "committed_monthly",
    "allocated_monthly",
    "discretionary_pool",
    "per_week",
    "spent_ratio",
    "sum_amounts",
    "discretionary_expenses",
    "goal_spent_amount",
    "compute_goal_progress",
    "select_goals_at_risk",
    "compute_budget_summary",
    "compute_widget_summary",
]
