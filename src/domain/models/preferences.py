"""User preferences driving budget calculations."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class WeekStart(str, Enum):
    """First day of the budgeting week."""

    SUNDAY = "sunday"
    MONDAY = "monday"

    @property
    def weekday_number(self) -> int:
        """Weekday in 1..7 numbering where 1 is Sunday."""
        return 1 if self is WeekStart.SUNDAY else 2


@dataclass(frozen=True)
class BudgetPreferences:
    """Process-wide budget settings, persisted on every explicit save.

    Attributes:
        currency_code: Spending currency for transactions, bills and goals.
        budget_currency_code: Envelope currency; None means same as spending.
        monthly_envelope: Monthly spending allowance in budget currency.
        week_start: First day of the budgeting week.
        month_start_day: Day of month a budgeting month starts (1-28).
        cached_exchange_rate: Last fetched rate, 0 when never fetched.
        cached_rate_from: Currency the cached rate converts from.
        cached_rate_to: Currency the cached rate converts to.
        cached_rate_published_date: Trade date label of the cached rate.
    """

    currency_code: str = "USD"
    budget_currency_code: str | None = None
    monthly_envelope: Decimal = Decimal("0")
    week_start: WeekStart = WeekStart.SUNDAY
    month_start_day: int = 1
    cached_exchange_rate: Decimal = Decimal("0")
    cached_rate_from: str = ""
    cached_rate_to: str = ""
    cached_rate_published_date: str = ""

    @property
    def effective_budget_currency_code(self) -> str:
        return self.budget_currency_code or self.currency_code

    @property
    def has_dual_currency(self) -> bool:
        return bool(
            self.budget_currency_code
            and self.budget_currency_code != self.currency_code
        )

    def cached_rate_for(self, from_code: str, to_code: str) -> Decimal | None:
        """Return the cached rate when it was fetched for this exact pair."""
        if self.cached_exchange_rate <= 0:
            return None
        if self.cached_rate_from != from_code or self.cached_rate_to != to_code:
            return None
        return self.cached_exchange_rate


@dataclass(frozen=True)
class WidgetDefaults:
    """Reduced settings mirrored for the widget's key-value store."""

    monthly_envelope: Decimal = Decimal("0")
    currency_code: str = "USD"
    conversion_rate: Decimal = Decimal("1")
    week_start: WeekStart = WeekStart.SUNDAY


__all__ = ["WeekStart", "BudgetPreferences", "WidgetDefaults"]
