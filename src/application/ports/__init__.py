"""Application ports package."""

from .database import DatabaseEnginePort
from .exchange_rates import ExchangeRatePort
from .history_repository import (
    SavingsSnapshotsRepositoryPort,
    WeeklyLogsRepositoryPort,
)
from .ledger_repository import (
    CategoriesRepositoryPort,
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from .settings_repository import PreferencesRepositoryPort, SharedDefaultsPort

__all__ = [
    "DatabaseEnginePort",
    "ExchangeRatePort",
    "SavingsSnapshotsRepositoryPort",
    "WeeklyLogsRepositoryPort",
    "CategoriesRepositoryPort",
    "GoalsRepositoryPort",
    "RecurringBillsRepositoryPort",
    "TransactionsRepositoryPort",
    "PreferencesRepositoryPort",
    "SharedDefaultsPort",
]
