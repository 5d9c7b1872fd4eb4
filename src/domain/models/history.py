"""Domain models for closed-period history records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4


_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class MonthlySavingsSnapshot:
    """Immutable record of a closed month's budget performance.

    Attributes:
        month_start: First instant of the month.
        month_end: Start of the last day of the month.
        budget_amount: Envelope in budget currency.
        spent_amount: Expenses in spending currency.
        exchange_rate: Budget to spending rate frozen at creation.
        budget_currency_code: Budget currency code.
        spending_currency_code: Spending currency code.
        created_at: Creation instant.
    """

    month_start: datetime
    month_end: datetime
    budget_amount: Decimal
    spent_amount: Decimal
    exchange_rate: Decimal
    budget_currency_code: str
    spending_currency_code: str
    created_at: datetime
    id: UUID = field(default_factory=uuid4)

    @property
    def budget_in_spending_currency(self) -> Decimal:
        return self.budget_amount * self.exchange_rate

    @property
    def savings_in_spending_currency(self) -> Decimal:
        return self.budget_in_spending_currency - self.spent_amount

    @property
    def savings_in_budget_currency(self) -> Decimal:
        rate = self.exchange_rate if self.exchange_rate > 0 else Decimal("1")
        return self.budget_amount - (self.spent_amount / rate)

    @property
    def percentage_used(self) -> Decimal:
        budget = self.budget_in_spending_currency
        if budget <= 0:
            return Decimal("0")
        return min(self.spent_amount / budget * _HUNDRED, _HUNDRED)

    @property
    def is_under_budget(self) -> bool:
        return self.savings_in_spending_currency > 0


@dataclass(frozen=True)
class WeeklyLog:
    """Immutable summary of a closed week, in spending currency."""

    week_start: datetime
    week_end: datetime
    total_available: Decimal
    rolled_over_amount: Decimal
    unused_rolled_forward: Decimal
    goals_with_leftover: int
    currency_code: str
    created_at: datetime
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class MonthPerformance:
    """One row of the savings history.

    Past months carry their snapshot; the current month carries live
    figures computed at read time.
    """

    month_start: datetime
    month_end: datetime
    budget: Decimal
    spent: Decimal
    exchange_rate: Decimal
    snapshot: MonthlySavingsSnapshot | None = None

    @property
    def is_live(self) -> bool:
        return self.snapshot is None

    @property
    def budget_in_spending(self) -> Decimal:
        return self.budget * self.exchange_rate

    @property
    def savings_in_spending(self) -> Decimal:
        return self.budget_in_spending - self.spent

    @property
    def savings_in_budget(self) -> Decimal:
        rate = self.exchange_rate if self.exchange_rate > 0 else Decimal("1")
        return self.budget - (self.spent / rate)

    @property
    def percentage_used(self) -> Decimal:
        budget = self.budget_in_spending
        if budget <= 0:
            return Decimal("0")
        return min(self.spent / budget * _HUNDRED, _HUNDRED)

    @property
    def is_under_budget(self) -> bool:
        return self.savings_in_spending > 0


@dataclass(frozen=True)
class SavingsHistory:
    """Monthly performance rows, newest first, with totals."""

    months: list[MonthPerformance]
    spending_currency_code: str
    budget_currency_code: str

    @property
    def total_savings(self) -> Decimal:
        return sum(
            (
                month.savings_in_spending
                for month in self.months
                if month.snapshot is not None
            ),
            Decimal("0"),
        )

    @property
    def under_budget_count(self) -> int:
        return sum(
            1
            for month in self.months
            if month.snapshot is not None and month.is_under_budget
        )


__all__ = [
    "MonthlySavingsSnapshot",
    "WeeklyLog",
    "MonthPerformance",
    "SavingsHistory",
]
