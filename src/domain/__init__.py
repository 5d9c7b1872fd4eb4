"""Domain package for budget rules and core models."""

from .errors import (
    BudgetError,
    ExchangeRateUnavailableError,
    InvalidCurrencyCodeError,
    PersistenceError,
    StorageUnavailableError,
    ValidationError,
)
from .models import (
    BudgetPreferences,
    BudgetSummary,
    Category,
    CategorySnapshot,
    Goal,
    RecurringBill,
    Transaction,
)
from .services import (
    PeriodCalendar,
    compute_budget_summary,
    compute_widget_summary,
)

__all__ = [
    "BudgetError",
    "ExchangeRateUnavailableError",
    "InvalidCurrencyCodeError",
    "PersistenceError",
    "StorageUnavailableError",
    "ValidationError",
    "BudgetPreferences",
    "BudgetSummary",
    "Category",
    "CategorySnapshot",
    "Goal",
    "RecurringBill",
    "Transaction",
    "PeriodCalendar",
    "compute_budget_summary",
    "compute_widget_summary",
]
