"""Use case backing the home-screen widget."""

from datetime import datetime, tzinfo

from src.application.ports.ledger_repository import (
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from src.application.ports.settings_repository import SharedDefaultsPort
from src.domain.models.budget import WidgetSummary
from src.domain.services.budget_engine import compute_widget_summary
from src.domain.services.period_calendar import PeriodCalendar
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import resolve_now


class GetWidgetSummaryUseCase:
    """Compute the widget entry from the shared store.

    The widget never sees the full preferences record; it reads the mirrored
    key-value settings and the same ledger tables as the main process.
    """

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        bills_repository: RecurringBillsRepositoryPort,
        goals_repository: GoalsRepositoryPort,
        shared_defaults: SharedDefaultsPort,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        self._transactions_repository = transactions_repository
        self._bills_repository = bills_repository
        self._goals_repository = goals_repository
        self._shared_defaults = shared_defaults
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(self, now: datetime | None = None) -> WidgetSummary:
        defaults = self._shared_defaults.load_widget_defaults()
        calendar = PeriodCalendar(week_start=defaults.week_start, tz=self._tz)
        resolved_now = resolve_now(now, calendar.tz)
        if defaults.monthly_envelope <= 0:
            self._logger.info("Widget has no envelope configured")
            return compute_widget_summary(
                defaults, [], [], [], resolved_now, calendar
            )
        return compute_widget_summary(
            defaults,
            self._bills_repository.fetch_recurring_bills(active_only=True),
            self._goals_repository.fetch_goals(),
            self._transactions_repository.fetch_transactions(),
            resolved_now,
            calendar,
        )


__all__ = ["GetWidgetSummaryUseCase"]
