"""Use case to compute the budget summary shown on the dashboard."""

from datetime import datetime, tzinfo

from src.application.ports.ledger_repository import (
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
)
from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.domain.models.budget import BudgetSummary
from src.domain.services.budget_engine import compute_budget_summary
from src.domain.services.period_calendar import PeriodCalendar
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import resolve_now


class GetBudgetSummaryUseCase:
    """Load ledger records and derive weekly and monthly budget figures."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        bills_repository: RecurringBillsRepositoryPort,
        goals_repository: GoalsRepositoryPort,
        preferences_repository: PreferencesRepositoryPort,
        conversion_cache: CurrencyConversionCache,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port returning transactions.
            bills_repository: Port returning recurring bills.
            goals_repository: Port returning goals.
            preferences_repository: Port returning budget preferences.
            conversion_cache: Cache holding the live conversion rate.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Zone for period boundaries; UTC when omitted.
        """
        self._transactions_repository = transactions_repository
        self._bills_repository = bills_repository
        self._goals_repository = goals_repository
        self._preferences_repository = preferences_repository
        self._conversion_cache = conversion_cache
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(self, now: datetime | None = None) -> BudgetSummary:
        """Compute the summary for the period containing ``now``.

        Args:
            now: Instant to compute for; the current time when omitted.

        Returns:
            BudgetSummary: Derived figures in spending currency.
        """
        preferences = self._preferences_repository.load_preferences()
        calendar = PeriodCalendar.from_preferences(preferences, tz=self._tz)
        resolved_now = resolve_now(now, calendar.tz)
        bills = self._bills_repository.fetch_recurring_bills(active_only=True)
        goals = self._goals_repository.fetch_goals()
        transactions = self._transactions_repository.fetch_transactions()

        summary = compute_budget_summary(
            preferences,
            self._conversion_cache.rate_for(preferences),
            bills,
            goals,
            transactions,
            resolved_now,
            calendar,
        )
        if summary.is_over_weekly_limit:
            self._logger.warning(
                f"Weekly limit exceeded by {-summary.weekly_available} "
                f"{summary.currency_code}"
            )
        self._logger.info(
            f"Computed budget summary for {summary.week_range_label}: "
            f"{len(summary.goals_at_risk)} goals at risk"
        )
        return summary


__all__ = ["GetBudgetSummaryUseCase"]
