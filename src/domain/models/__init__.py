"""Domain models package."""

from .budget import BudgetSummary, GoalProgress, WidgetSummary
from .currency import ConversionState, ConversionStatus, RateQuote
from .history import (
    MonthlySavingsSnapshot,
    MonthPerformance,
    SavingsHistory,
    WeeklyLog,
)
from .ledger import (
    BillFrequency,
    Category,
    CategorySnapshot,
    Goal,
    GoalPeriod,
    RecurringBill,
    Transaction,
    TransactionKind,
)
from .preferences import BudgetPreferences, WeekStart, WidgetDefaults

__all__ = [
    "BudgetSummary",
    "GoalProgress",
    "WidgetSummary",
    "ConversionState",
    "ConversionStatus",
    "RateQuote",
    "MonthlySavingsSnapshot",
    "MonthPerformance",
    "SavingsHistory",
    "WeeklyLog",
    "BillFrequency",
    "Category",
    "CategorySnapshot",
    "Goal",
    "GoalPeriod",
    "RecurringBill",
    "Transaction",
    "TransactionKind",
    "BudgetPreferences",
    "WeekStart",
    "WidgetDefaults",
]
