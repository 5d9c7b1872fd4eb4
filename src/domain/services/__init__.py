"""Domain services package."""

from .budget_engine import (
    compute_budget_summary,
    compute_widget_summary,
)
from .normalization import normalize_currency_code, normalize_name
from .period_calendar import PeriodCalendar
from .savings import build_savings_history, plan_monthly_snapshots
from .weekly_log import plan_weekly_logs

__all__ = [
    "compute_budget_summary",
    "compute_widget_summary",
    "normalize_currency_code",
    "normalize_name",
    "PeriodCalendar",
    "build_savings_history",
    "plan_monthly_snapshots",
    "plan_weekly_logs",
]
