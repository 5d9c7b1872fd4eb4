"""Key-value repositories for preferences and the widget mirror.

Preferences live in ``app_settings``; the reduced widget settings live in
``shared_defaults`` under the keys the widget reads.
"""

from decimal import Decimal, InvalidOperation

from sqlalchemy import text

from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
    SharedDefaultsPort,
)
from src.domain.models.preferences import (
    BudgetPreferences,
    WeekStart,
    WidgetDefaults,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.sql_support import SqlAlchemyRepository
from src.utils.decimal_utils import coerce_decimal, decimal_to_text


def _select_sql(table: str):
    return text(f"SELECT key, value FROM {table}")


def _upsert_sql(table: str):
    return text(
        f"INSERT OR REPLACE INTO {table} (key, value) VALUES (:key, :value)"
    )


class _KeyValueRepository(SqlAlchemyRepository):
    _table = ""

    def __init__(self, db_port, logger=None) -> None:
        super().__init__(db_port)
        self._logger = logger or get_app_logger()

    def _load(self) -> dict[str, str]:
        rows = self._fetch_all(_select_sql(self._table))
        return {row.key: row.value for row in rows}

    def _store(self, values: dict[str, str]) -> None:
        self._execute(
            _upsert_sql(self._table),
            [{"key": key, "value": value} for key, value in values.items()],
        )

    def _decimal(self, raw: str | None, default: Decimal) -> Decimal:
        if raw is None:
            return default
        try:
            return coerce_decimal(raw)
        except InvalidOperation:
            self._logger.warning(
                f"Ignoring malformed number '{raw}' in {self._table}"
            )
            return default

    def _week_start(self, raw: str | None) -> WeekStart:
        try:
            return WeekStart(raw) if raw else WeekStart.SUNDAY
        except ValueError:
            self._logger.warning(
                f"Ignoring unknown week start '{raw}' in {self._table}"
            )
            return WeekStart.SUNDAY


class SqlAlchemyPreferencesRepository(
    _KeyValueRepository,
    PreferencesRepositoryPort,
):
    """Preferences stored as one row per field."""

    _table = "app_settings"

    def load_preferences(self) -> BudgetPreferences:
        """Return stored preferences, defaults when nothing is stored."""
        values = self._load()
        defaults = BudgetPreferences()
        month_start_day = values.get("month_start_day")
        return BudgetPreferences(
            currency_code=values.get("currency_code") or defaults.currency_code,
            budget_currency_code=values.get("budget_currency_code") or None,
            monthly_envelope=self._decimal(
                values.get("monthly_envelope"),
                defaults.monthly_envelope,
            ),
            week_start=self._week_start(values.get("week_start")),
            month_start_day=(
                int(month_start_day)
                if month_start_day and month_start_day.isdigit()
                else defaults.month_start_day
            ),
            cached_exchange_rate=self._decimal(
                values.get("cached_exchange_rate"),
                defaults.cached_exchange_rate,
            ),
            cached_rate_from=values.get("cached_rate_from", ""),
            cached_rate_to=values.get("cached_rate_to", ""),
            cached_rate_published_date=values.get(
                "cached_rate_published_date", ""
            ),
        )

    def save_preferences(self, preferences: BudgetPreferences) -> None:
        """Persist the full preferences record in one transaction."""
        self._store(
            {
                "currency_code": preferences.currency_code,
                "budget_currency_code": preferences.budget_currency_code or "",
                "monthly_envelope": decimal_to_text(
                    preferences.monthly_envelope
                ),
                "week_start": preferences.week_start.value,
                "month_start_day": str(preferences.month_start_day),
                "cached_exchange_rate": decimal_to_text(
                    preferences.cached_exchange_rate
                ),
                "cached_rate_from": preferences.cached_rate_from,
                "cached_rate_to": preferences.cached_rate_to,
                "cached_rate_published_date": (
                    preferences.cached_rate_published_date
                ),
            }
        )


class SqlAlchemySharedDefaultsRepository(
    _KeyValueRepository,
    SharedDefaultsPort,
):
    """Reduced settings read by the widget process."""

    _table = "shared_defaults"

    def load_widget_defaults(self) -> WidgetDefaults:
        values = self._load()
        defaults = WidgetDefaults()
        rate = self._decimal(
            values.get("conversionRate"),
            defaults.conversion_rate,
        )
        return WidgetDefaults(
            monthly_envelope=self._decimal(
                values.get("monthlyEnvelope"),
                defaults.monthly_envelope,
            ),
            currency_code=values.get("currencyCode") or defaults.currency_code,
            conversion_rate=rate if rate > 0 else defaults.conversion_rate,
            week_start=self._week_start(values.get("weekStart")),
        )

    def save_widget_defaults(self, defaults: WidgetDefaults) -> None:
        self._store(
            {
                "monthlyEnvelope": decimal_to_text(defaults.monthly_envelope),
                "currencyCode": defaults.currency_code,
                "conversionRate": decimal_to_text(defaults.conversion_rate),
                "weekStart": defaults.week_start.value,
            }
        )


__all__ = [
    "SqlAlchemyPreferencesRepository",
    "SqlAlchemySharedDefaultsRepository",
]
