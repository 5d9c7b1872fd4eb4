"""CLI adapter printing the weekly and monthly budget summary."""

import asyncio

from src.domain.errors import StorageUnavailableError
from src.domain.models.budget import BudgetSummary
from src.infrastructure.container import (
    build_budget_summary_use_case,
    build_conversion_cache,
    build_database_adapter,
    build_preferences_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def _format_amount(value, currency_code: str) -> str:
    return f"{value:,.2f} {currency_code}"


def render_summary(summary: BudgetSummary) -> list[str]:
    """Return the printable lines of a budget summary."""
    code = summary.currency_code
    lines = [
        f"Week {summary.week_range_label} "
        f"({summary.days_left_in_week} days left)",
        f"  Available: {_format_amount(summary.weekly_available, code)}"
        + ("  [over limit]" if summary.is_over_weekly_limit else ""),
        f"  Allowance: {_format_amount(summary.weekly_allowance, code)}",
        f"  Spent:     "
        f"{_format_amount(summary.weekly_discretionary_spent, code)}",
        "Weekly breakdown",
        f"  Envelope:  {_format_amount(summary.weekly_envelope, code)}",
        f"  Bills:     -{_format_amount(summary.weekly_committed, code)}",
        f"  Goals:     -{_format_amount(summary.weekly_goals, code)}",
        "This month",
        f"  Income:    {_format_amount(summary.total_income, code)}",
        f"  Expenses:  {_format_amount(summary.total_expenses, code)}",
        f"  Savings:   {_format_amount(summary.monthly_savings, code)}",
    ]
    if summary.goals_at_risk:
        lines.append("Goals at risk")
        for item in summary.goals_at_risk:
            lines.append(
                f"  {item.goal.category_name}: "
                f"{item.spent_ratio * 100:.0f}% of "
                f"{_format_amount(item.goal.spending_limit, code)}"
            )
    return lines


def main() -> None:
    """Refresh the conversion rate and print the current summary."""
    logger = get_app_logger()
    try:
        settings = build_settings()
    except StorageUnavailableError as exc:
        logger.error(str(exc))
        raise SystemExit(1) from exc

    db_adapter = build_database_adapter(settings)
    cache = build_conversion_cache(db_adapter, settings)
    preferences = build_preferences_repository(db_adapter).load_preferences()
    asyncio.run(cache.refresh_for(preferences))
    if preferences.has_dual_currency:
        print(
            cache.rate_description(
                preferences.effective_budget_currency_code,
                preferences.currency_code,
            )
            + f" ({cache.state.status.value})"
        )

    use_case = build_budget_summary_use_case(settings, conversion_cache=cache)
    for line in render_summary(use_case.execute()):
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
