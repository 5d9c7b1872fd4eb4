"""Use cases for the append-only monthly savings history."""

from dataclasses import dataclass
from datetime import datetime, tzinfo

from src.application.ports.history_repository import (
    SavingsSnapshotsRepositoryPort,
)
from src.application.ports.ledger_repository import TransactionsRepositoryPort
from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
)
from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.domain.models.history import SavingsHistory
from src.domain.services.period_calendar import PeriodCalendar
from src.domain.services.savings import (
    build_savings_history,
    plan_monthly_snapshots,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import resolve_now


@dataclass(frozen=True)
class SyncSnapshotsResult:
    """Result of a snapshot sync run.

    Attributes:
        existing_count: Snapshots already stored before the run.
        created_count: Snapshots written by the run.
    """

    existing_count: int
    created_count: int


class SyncMonthlySnapshotsUseCase:
    """Freeze every closed month that has expenses and no snapshot yet."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        snapshots_repository: SavingsSnapshotsRepositoryPort,
        preferences_repository: PreferencesRepositoryPort,
        conversion_cache: CurrencyConversionCache,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port returning transactions.
            snapshots_repository: Port storing monthly snapshots.
            preferences_repository: Port returning budget preferences.
            conversion_cache: Cache holding the live conversion rate.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Zone for period boundaries; UTC when omitted.
        """
        self._transactions_repository = transactions_repository
        self._snapshots_repository = snapshots_repository
        self._preferences_repository = preferences_repository
        self._conversion_cache = conversion_cache
        self._logger = logger or get_app_logger()
        self._tz = tz

    def run(self, now: datetime | None = None) -> SyncSnapshotsResult:
        """Create the missing snapshots.

        Args:
            now: Current instant; the current time when omitted.

        Returns:
            SyncSnapshotsResult: How many snapshots existed and were added.
        """
        preferences = self._preferences_repository.load_preferences()
        calendar = PeriodCalendar.from_preferences(preferences, tz=self._tz)
        existing = self._snapshots_repository.fetch_snapshots()
        if preferences.monthly_envelope <= 0:
            self._logger.info("No monthly envelope set; skipping snapshots")
            return SyncSnapshotsResult(len(existing), 0)

        snapshots = plan_monthly_snapshots(
            preferences,
            self._conversion_cache.rate_for(preferences),
            self._transactions_repository.fetch_transactions(),
            existing,
            resolve_now(now, calendar.tz),
            calendar,
        )
        created = 0
        if snapshots:
            created = self._snapshots_repository.add_snapshots(snapshots)
            self._logger.info(f"Created {created} monthly savings snapshots")
        return SyncSnapshotsResult(
            existing_count=len(existing),
            created_count=created,
        )


class GetMonthlySavingsUseCase:
    """Build the monthly performance view, newest month first."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        snapshots_repository: SavingsSnapshotsRepositoryPort,
        preferences_repository: PreferencesRepositoryPort,
        conversion_cache: CurrencyConversionCache,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        self._transactions_repository = transactions_repository
        self._snapshots_repository = snapshots_repository
        self._preferences_repository = preferences_repository
        self._conversion_cache = conversion_cache
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(self, now: datetime | None = None) -> SavingsHistory:
        preferences = self._preferences_repository.load_preferences()
        calendar = PeriodCalendar.from_preferences(preferences, tz=self._tz)
        history = build_savings_history(
            preferences,
            self._conversion_cache.rate_for(preferences),
            self._transactions_repository.fetch_transactions(),
            self._snapshots_repository.fetch_snapshots(),
            resolve_now(now, calendar.tz),
            calendar,
        )
        self._logger.info(
            f"Loaded {len(history.months)} months of savings history"
        )
        return history


__all__ = [
    "SyncSnapshotsResult",
    "SyncMonthlySnapshotsUseCase",
    "GetMonthlySavingsUseCase",
]
