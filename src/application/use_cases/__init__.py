"""Application use cases package."""

from .add_expense_shortcut import (
    AddExpenseShortcutUseCase,
    ShortcutExpenseResult,
)
from .currency_conversion import CurrencyConversionCache
from .get_budget_summary import GetBudgetSummaryUseCase
from .get_widget_summary import GetWidgetSummaryUseCase
from .manage_categories import (
    DeleteCategoryUseCase,
    SaveCategoryUseCase,
    SeedCategoriesResult,
    SeedDefaultCategoriesUseCase,
)
from .manage_ledger import (
    DeleteGoalUseCase,
    DeleteRecurringBillUseCase,
    DeleteTransactionUseCase,
    SaveGoalUseCase,
    SaveRecurringBillUseCase,
    SaveTransactionUseCase,
)
from .monthly_savings import (
    GetMonthlySavingsUseCase,
    SyncMonthlySnapshotsUseCase,
    SyncSnapshotsResult,
)
from .update_preferences import UpdatePreferencesUseCase
from .weekly_log import (
    CloseWeeksResult,
    CloseWeeksUseCase,
    GetWeeklyLogsUseCase,
)

__all__ = [
    "AddExpenseShortcutUseCase",
    "ShortcutExpenseResult",
    "CurrencyConversionCache",
    "GetBudgetSummaryUseCase",
    "GetWidgetSummaryUseCase",
    "DeleteCategoryUseCase",
    "SaveCategoryUseCase",
    "SeedCategoriesResult",
    "SeedDefaultCategoriesUseCase",
    "DeleteGoalUseCase",
    "DeleteRecurringBillUseCase",
    "DeleteTransactionUseCase",
    "SaveGoalUseCase",
    "SaveRecurringBillUseCase",
    "SaveTransactionUseCase",
    "GetMonthlySavingsUseCase",
    "SyncMonthlySnapshotsUseCase",
    "SyncSnapshotsResult",
    "UpdatePreferencesUseCase",
    "CloseWeeksResult",
    "CloseWeeksUseCase",
    "GetWeeklyLogsUseCase",
]
