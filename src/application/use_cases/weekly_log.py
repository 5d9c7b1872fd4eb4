"""Use cases for closing weeks into the weekly log."""

from dataclasses import dataclass
from datetime import datetime, tzinfo

from src.application.ports.history_repository import WeeklyLogsRepositoryPort
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
from src.domain.models.history import WeeklyLog
from src.domain.services.period_calendar import PeriodCalendar
from src.domain.services.weekly_log import plan_weekly_logs
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import resolve_now


@dataclass(frozen=True)
class CloseWeeksResult:
    """Result of a weekly close run.

    Attributes:
        existing_count: Logs already stored before the run.
        created_count: Logs written by the run.
    """

    existing_count: int
    created_count: int


class CloseWeeksUseCase:
    """Log every closed week that has no entry yet.

    Unused allowance of each week rolls forward into the next one, so weeks
    are logged oldest first.
    """

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        bills_repository: RecurringBillsRepositoryPort,
        goals_repository: GoalsRepositoryPort,
        logs_repository: WeeklyLogsRepositoryPort,
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
            logs_repository: Port storing weekly logs.
            preferences_repository: Port returning budget preferences.
            conversion_cache: Cache holding the live conversion rate.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Zone for period boundaries; UTC when omitted.
        """
        self._transactions_repository = transactions_repository
        self._bills_repository = bills_repository
        self._goals_repository = goals_repository
        self._logs_repository = logs_repository
        self._preferences_repository = preferences_repository
        self._conversion_cache = conversion_cache
        self._logger = logger or get_app_logger()
        self._tz = tz

    def run(self, now: datetime | None = None) -> CloseWeeksResult:
        """Create log entries for closed weeks.

        Args:
            now: Current instant; the current time when omitted.

        Returns:
            CloseWeeksResult: How many logs existed and were added.
        """
        preferences = self._preferences_repository.load_preferences()
        calendar = PeriodCalendar.from_preferences(preferences, tz=self._tz)
        existing = self._logs_repository.fetch_weekly_logs()
        logs = plan_weekly_logs(
            preferences,
            self._conversion_cache.rate_for(preferences),
            self._bills_repository.fetch_recurring_bills(active_only=True),
            self._goals_repository.fetch_goals(),
            self._transactions_repository.fetch_transactions(),
            existing,
            resolve_now(now, calendar.tz),
            calendar,
        )
        created = 0
        if logs:
            created = self._logs_repository.add_weekly_logs(logs)
            self._logger.info(f"Closed {created} weeks into the weekly log")
        return CloseWeeksResult(
            existing_count=len(existing),
            created_count=created,
        )


class GetWeeklyLogsUseCase:
    """Return stored weekly logs, newest week first."""

    def __init__(self, logs_repository: WeeklyLogsRepositoryPort) -> None:
        self._logs_repository = logs_repository

    def execute(self) -> list[WeeklyLog]:
        logs = self._logs_repository.fetch_weekly_logs()
        return sorted(logs, key=lambda log: log.week_start, reverse=True)


__all__ = ["CloseWeeksResult", "CloseWeeksUseCase", "GetWeeklyLogsUseCase"]
