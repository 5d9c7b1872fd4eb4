"""Domain models for derived budget figures."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.models.ledger import Goal, Transaction


@dataclass(frozen=True)
class GoalProgress:
    """Spending against one goal within its current window."""

    goal: Goal
    window_start: datetime
    window_end: datetime
    spent_amount: Decimal
    spent_ratio: Decimal

    @property
    def remaining(self) -> Decimal:
        """Limit minus spending; negative when the goal is exceeded."""
        return self.goal.spending_limit - self.spent_amount


@dataclass(frozen=True)
class BudgetSummary:
    """Every figure derived from one set of budget inputs.

    All amounts are in spending currency.
    """

    currency_code: str
    envelope_in_spending_currency: Decimal
    committed_monthly: Decimal
    allocated_monthly: Decimal
    discretionary_pool: Decimal
    weeks_in_month: Decimal
    weekly_allowance: Decimal
    goal_category_names: frozenset[str]
    week_start: datetime
    week_end: datetime
    weekly_discretionary_spent: Decimal
    weekly_envelope: Decimal
    weekly_committed: Decimal
    weekly_goals: Decimal
    days_left_in_week: int
    week_range_label: str
    month_transactions: list[Transaction]
    total_income: Decimal
    total_expenses: Decimal
    monthly_savings: Decimal
    goal_progress: list[GoalProgress]
    goals_at_risk: list[GoalProgress]

    @property
    def weekly_available(self) -> Decimal:
        """Allowance minus spending; negative when over the weekly limit."""
        return self.weekly_allowance - self.weekly_discretionary_spent

    @property
    def is_over_weekly_limit(self) -> bool:
        return self.weekly_available < 0


@dataclass(frozen=True)
class WidgetSummary:
    """Subset of budget figures shown by the home-screen widget."""

    date: datetime
    weekly_available: Decimal
    weekly_allowance: Decimal
    weekly_spent: Decimal
    days_left: int
    currency_code: str


__all__ = ["GoalProgress", "BudgetSummary", "WidgetSummary"]
