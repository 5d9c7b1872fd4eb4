"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.exchange_rates import ExchangeRatePort
from src.application.ports.history_repository import (
    SavingsSnapshotsRepositoryPort,
    WeeklyLogsRepositoryPort,
)
from src.application.ports.ledger_repository import (
    CategoriesRepositoryPort,
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
    SharedDefaultsPort,
)
from src.application.use_cases.add_expense_shortcut import (
    AddExpenseShortcutUseCase,
)
from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.application.use_cases.get_budget_summary import (
    GetBudgetSummaryUseCase,
)
from src.application.use_cases.get_widget_summary import (
    GetWidgetSummaryUseCase,
)
from src.application.use_cases.manage_categories import (
    SeedDefaultCategoriesUseCase,
)
from src.application.use_cases.manage_ledger import SaveTransactionUseCase
from src.application.use_cases.monthly_savings import (
    GetMonthlySavingsUseCase,
    SyncMonthlySnapshotsUseCase,
)
from src.application.use_cases.update_preferences import (
    UpdatePreferencesUseCase,
)
from src.application.use_cases.weekly_log import (
    CloseWeeksUseCase,
    GetWeeklyLogsUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.exchange_rates import StaticExchangeRateProvider
from src.infrastructure.history_repository import (
    SqlAlchemySavingsSnapshotsRepository,
    SqlAlchemyWeeklyLogsRepository,
)
from src.infrastructure.ledger_repository import (
    SqlAlchemyCategoriesRepository,
    SqlAlchemyGoalsRepository,
    SqlAlchemyRecurringBillsRepository,
    SqlAlchemyTransactionsRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import StorageSettings
from src.infrastructure.settings_repository import (
    SqlAlchemyPreferencesRepository,
    SqlAlchemySharedDefaultsRepository,
)


def build_settings() -> StorageSettings:
    """Return storage settings read from the environment."""
    return StorageSettings.from_env()


def build_database_adapter(
    settings: StorageSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter(settings)


def build_transactions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionsRepositoryPort:
    return SqlAlchemyTransactionsRepository(db_port or build_database_adapter())


def build_categories_repository(
    db_port: DatabaseEnginePort | None = None,
) -> CategoriesRepositoryPort:
    return SqlAlchemyCategoriesRepository(db_port or build_database_adapter())


def build_bills_repository(
    db_port: DatabaseEnginePort | None = None,
) -> RecurringBillsRepositoryPort:
    return SqlAlchemyRecurringBillsRepository(
        db_port or build_database_adapter()
    )


def build_goals_repository(
    db_port: DatabaseEnginePort | None = None,
) -> GoalsRepositoryPort:
    return SqlAlchemyGoalsRepository(db_port or build_database_adapter())


def build_snapshots_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SavingsSnapshotsRepositoryPort:
    return SqlAlchemySavingsSnapshotsRepository(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_weekly_logs_repository(
    db_port: DatabaseEnginePort | None = None,
) -> WeeklyLogsRepositoryPort:
    return SqlAlchemyWeeklyLogsRepository(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_preferences_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PreferencesRepositoryPort:
    return SqlAlchemyPreferencesRepository(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_shared_defaults(
    db_port: DatabaseEnginePort | None = None,
) -> SharedDefaultsPort:
    return SqlAlchemySharedDefaultsRepository(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_rate_provider(
    settings: StorageSettings | None = None,
) -> ExchangeRatePort:
    """Return the configured exchange-rate provider."""
    resolved = settings or build_settings()
    return StaticExchangeRateProvider.from_env_string(resolved.static_rates)


def build_conversion_cache(
    db_port: DatabaseEnginePort | None = None,
    settings: StorageSettings | None = None,
) -> CurrencyConversionCache:
    """Return a conversion cache hydrated from stored preferences."""
    db_port = db_port or build_database_adapter(settings)
    return CurrencyConversionCache(
        build_rate_provider(settings),
        build_preferences_repository(db_port),
        shared_defaults=build_shared_defaults(db_port),
        logger=get_app_logger(),
    )


def build_budget_summary_use_case(
    settings: StorageSettings | None = None,
    conversion_cache: CurrencyConversionCache | None = None,
) -> GetBudgetSummaryUseCase:
    """Return the dashboard summary use case wired to the shared store."""
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return GetBudgetSummaryUseCase(
        build_transactions_repository(db_port),
        build_bills_repository(db_port),
        build_goals_repository(db_port),
        build_preferences_repository(db_port),
        conversion_cache or build_conversion_cache(db_port, resolved),
        tz=resolved.zone,
    )


def build_widget_summary_use_case(
    settings: StorageSettings | None = None,
) -> GetWidgetSummaryUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return GetWidgetSummaryUseCase(
        build_transactions_repository(db_port),
        build_bills_repository(db_port),
        build_goals_repository(db_port),
        build_shared_defaults(db_port),
        tz=resolved.zone,
    )


def build_sync_snapshots_use_case(
    settings: StorageSettings | None = None,
    conversion_cache: CurrencyConversionCache | None = None,
) -> SyncMonthlySnapshotsUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return SyncMonthlySnapshotsUseCase(
        build_transactions_repository(db_port),
        build_snapshots_repository(db_port),
        build_preferences_repository(db_port),
        conversion_cache or build_conversion_cache(db_port, resolved),
        tz=resolved.zone,
    )


def build_monthly_savings_use_case(
    settings: StorageSettings | None = None,
    conversion_cache: CurrencyConversionCache | None = None,
) -> GetMonthlySavingsUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return GetMonthlySavingsUseCase(
        build_transactions_repository(db_port),
        build_snapshots_repository(db_port),
        build_preferences_repository(db_port),
        conversion_cache or build_conversion_cache(db_port, resolved),
        tz=resolved.zone,
    )


def build_close_weeks_use_case(
    settings: StorageSettings | None = None,
    conversion_cache: CurrencyConversionCache | None = None,
) -> CloseWeeksUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return CloseWeeksUseCase(
        build_transactions_repository(db_port),
        build_bills_repository(db_port),
        build_goals_repository(db_port),
        build_weekly_logs_repository(db_port),
        build_preferences_repository(db_port),
        conversion_cache or build_conversion_cache(db_port, resolved),
        tz=resolved.zone,
    )


def build_weekly_logs_use_case(
    settings: StorageSettings | None = None,
) -> GetWeeklyLogsUseCase:
    resolved = settings or build_settings()
    return GetWeeklyLogsUseCase(
        build_weekly_logs_repository(build_database_adapter(resolved))
    )


def build_add_expense_use_case(
    settings: StorageSettings | None = None,
) -> AddExpenseShortcutUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return AddExpenseShortcutUseCase(
        build_transactions_repository(db_port),
        build_categories_repository(db_port),
        tz=resolved.zone,
    )


def build_seed_categories_use_case(
    settings: StorageSettings | None = None,
) -> SeedDefaultCategoriesUseCase:
    resolved = settings or build_settings()
    return SeedDefaultCategoriesUseCase(
        build_categories_repository(build_database_adapter(resolved))
    )


def build_save_transaction_use_case(
    settings: StorageSettings | None = None,
) -> SaveTransactionUseCase:
    resolved = settings or build_settings()
    return SaveTransactionUseCase(
        build_transactions_repository(build_database_adapter(resolved))
    )


def build_update_preferences_use_case(
    settings: StorageSettings | None = None,
    conversion_cache: CurrencyConversionCache | None = None,
) -> UpdatePreferencesUseCase:
    resolved = settings or build_settings()
    db_port = build_database_adapter(resolved)
    return UpdatePreferencesUseCase(
        build_preferences_repository(db_port),
        build_shared_defaults(db_port),
        conversion_cache or build_conversion_cache(db_port, resolved),
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_transactions_repository",
    "build_categories_repository",
    "build_bills_repository",
    "build_goals_repository",
    "build_snapshots_repository",
    "build_weekly_logs_repository",
    "build_preferences_repository",
    "build_shared_defaults",
    "build_rate_provider",
    "build_conversion_cache",
    "build_budget_summary_use_case",
    "build_widget_summary_use_case",
    "build_sync_snapshots_use_case",
    "build_monthly_savings_use_case",
    "build_close_weeks_use_case",
    "build_weekly_logs_use_case",
    "build_add_expense_use_case",
    "build_seed_categories_use_case",
    "build_save_transaction_use_case",
    "build_update_preferences_use_case",
]
