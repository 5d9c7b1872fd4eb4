"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.domain.errors import (
    PersistenceError,
    StorageUnavailableError,
    ValidationError,
)
from src.domain.models.budget import BudgetSummary
from src.domain.models.history import SavingsHistory, WeeklyLog
from src.domain.models.ledger import (
    Category,
    CategorySnapshot,
    Transaction,
    TransactionKind,
)
from src.domain.models.preferences import BudgetPreferences, WeekStart
from src.infrastructure.container import (
    build_budget_summary_use_case,
    build_categories_repository,
    build_close_weeks_use_case,
    build_conversion_cache,
    build_database_adapter,
    build_monthly_savings_use_case,
    build_preferences_repository,
    build_save_transaction_use_case,
    build_seed_categories_use_case,
    build_settings,
    build_sync_snapshots_use_case,
    build_update_preferences_use_case,
    build_weekly_logs_use_case,
)
from src.infrastructure.settings import StorageSettings


PAGES = ["Dashboard", "Savings", "Weekly Log", "Add Transaction", "Settings"]


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the numpy and pandas imports Altair relies on are whole.

    Returns:
        tuple[bool, str | None]: Whether charts can render, and why not.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Charts unavailable: numpy import is incomplete."
    if not hasattr(pandas, "Timestamp"):
        return False, "Charts unavailable: pandas import is incomplete."
    return True, None


@st.cache_resource(show_spinner=False)
def _get_settings() -> StorageSettings:
    settings = build_settings()
    build_seed_categories_use_case(settings).run()
    return settings


@st.cache_resource(show_spinner=False)
def _get_conversion_cache() -> CurrencyConversionCache:
    """Conversion cache shared by every session, refreshed once on start."""
    settings = _get_settings()
    db_adapter = build_database_adapter(settings)
    cache = build_conversion_cache(db_adapter, settings)
    preferences = build_preferences_repository(db_adapter).load_preferences()
    asyncio.run(cache.refresh_for(preferences))
    return cache


def _fetch_preferences() -> BudgetPreferences:
    adapter = build_database_adapter(_get_settings())
    return build_preferences_repository(adapter).load_preferences()


def _fetch_budget_summary() -> BudgetSummary:
    """Compute the current summary through the use case."""
    use_case = build_budget_summary_use_case(
        _get_settings(),
        conversion_cache=_get_conversion_cache(),
    )
    return use_case.execute()


@st.cache_data(show_spinner=False, ttl=60)
def _load_budget_summary(schema_version: int = 1) -> BudgetSummary:
    """Cached wrapper around _fetch_budget_summary."""
    _ = schema_version
    return _fetch_budget_summary()


def _fetch_savings_history() -> SavingsHistory:
    """Freeze finished months, then read the savings history."""
    settings = _get_settings()
    cache = _get_conversion_cache()
    build_sync_snapshots_use_case(settings, conversion_cache=cache).run()
    use_case = build_monthly_savings_use_case(
        settings,
        conversion_cache=cache,
    )
    return use_case.execute()


@st.cache_data(show_spinner=False, ttl=60)
def _load_savings_history(schema_version: int = 1) -> SavingsHistory:
    """Cached wrapper around _fetch_savings_history."""
    _ = schema_version
    return _fetch_savings_history()


def _fetch_weekly_logs() -> list[WeeklyLog]:
    """Close finished weeks, then read the weekly log."""
    settings = _get_settings()
    build_close_weeks_use_case(
        settings,
        conversion_cache=_get_conversion_cache(),
    ).run()
    return build_weekly_logs_use_case(settings).execute()


@st.cache_data(show_spinner=False, ttl=60)
def _load_weekly_logs(schema_version: int = 1) -> list[WeeklyLog]:
    """Cached wrapper around _fetch_weekly_logs."""
    _ = schema_version
    return _fetch_weekly_logs()


def _fetch_categories(kind: TransactionKind) -> list[Category]:
    adapter = build_database_adapter(_get_settings())
    return build_categories_repository(adapter).fetch_categories(kind=kind)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return f"{value:,.2f} {currency_code}"


def _render_dashboard(summary: BudgetSummary) -> None:
    """Render weekly spending power, breakdown and goals at risk."""
    code = summary.currency_code
    st.subheader(f"This week · {summary.week_range_label}")
    available_col, allowance_col, spent_col = st.columns(3)
    available_col.metric(
        "Available",
        _format_currency(summary.weekly_available, code),
        f"{summary.days_left_in_week} days left",
        delta_color="off",
    )
    allowance_col.metric(
        "Allowance",
        _format_currency(summary.weekly_allowance, code),
    )
    spent_col.metric(
        "Spent",
        _format_currency(summary.weekly_discretionary_spent, code),
    )
    if summary.is_over_weekly_limit:
        st.warning("You are over this week's limit.")

    st.subheader("Weekly breakdown")
    st.dataframe(
        [
            {"Item": "Envelope", "Amount": _format_currency(
                summary.weekly_envelope, code)},
            {"Item": "Bills", "Amount": _format_currency(
                -summary.weekly_committed, code)},
            {"Item": "Goals", "Amount": _format_currency(
                -summary.weekly_goals, code)},
            {"Item": "Allowance", "Amount": _format_currency(
                summary.weekly_allowance, code)},
        ],
        width="stretch",
        hide_index=True,
    )

    income_col, expenses_col, savings_col = st.columns(3)
    income_col.metric("Income", _format_currency(summary.total_income, code))
    expenses_col.metric(
        "Expenses",
        _format_currency(summary.total_expenses, code),
    )
    savings_col.metric(
        "Monthly savings",
        _format_currency(summary.monthly_savings, code),
    )

    if summary.goals_at_risk:
        st.subheader("Goals at risk")
        for item in summary.goals_at_risk:
            st.progress(
                min(float(item.spent_ratio), 1.0),
                text=(
                    f"{item.goal.category_name}: "
                    f"{_format_currency(item.spent_amount, code)} of "
                    f"{_format_currency(item.goal.spending_limit, code)}"
                ),
            )


def _prepare_savings_chart_data(
    history: SavingsHistory,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows, oldest month first."""
    code = history.spending_currency_code
    data: list[dict[str, str | float]] = []
    for month in reversed(history.months):
        data.append(
            {
                "month": f"{month.month_start:%b %Y}",
                "savings": float(month.savings_in_spending),
                "savings_label": _format_currency(
                    month.savings_in_spending,
                    code,
                ),
                "used_label": f"{month.percentage_used:.0f}%",
                "status": "Under budget"
                if month.is_under_budget
                else "Over budget",
            }
        )
    return data


def _render_savings_chart(history: SavingsHistory) -> None:
    data = _prepare_savings_chart_data(history)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("month:N", sort=None, title=None),
        y=alt.Y("savings:Q", title="Savings"),
        color=alt.Color(
            "status:N",
            scale=alt.Scale(
                domain=["Under budget", "Over budget"],
                range=["#2e7d32", "#e76f51"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("savings_label:N"),
            alt.Tooltip("used_label:N"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_savings(history: SavingsHistory) -> None:
    """Render the monthly savings history."""
    if not history.months:
        st.info("No monthly history yet.")
        return
    code = history.spending_currency_code
    total_col, count_col = st.columns(2)
    total_col.metric(
        "Total savings",
        _format_currency(history.total_savings, code),
    )
    count_col.metric("Months under budget", history.under_budget_count)

    charts_ok, message = _check_altair_dependencies()
    if charts_ok:
        _render_savings_chart(history)
    else:
        st.warning(message)

    st.dataframe(
        [
            {
                "Month": f"{month.month_start:%B %Y}"
                + (" (live)" if month.is_live else ""),
                "Budget": _format_currency(month.budget_in_spending, code),
                "Spent": _format_currency(month.spent, code),
                "Savings": _format_currency(month.savings_in_spending, code),
                "Used": f"{month.percentage_used:.0f}%",
            }
            for month in history.months
        ],
        width="stretch",
        hide_index=True,
    )


def _render_weekly_log(logs: Sequence[WeeklyLog]) -> None:
    if not logs:
        st.info("No finished weeks logged yet.")
        return
    st.dataframe(
        [
            {
                "Week": f"{log.week_start:%b %d} – {log.week_end:%b %d, %Y}",
                "Available": _format_currency(
                    log.total_available,
                    log.currency_code,
                ),
                "Rolled over": _format_currency(
                    log.rolled_over_amount,
                    log.currency_code,
                ),
                "Unused": _format_currency(
                    log.unused_rolled_forward,
                    log.currency_code,
                ),
                "Goals with leftover": log.goals_with_leftover,
            }
            for log in logs
        ],
        width="stretch",
        hide_index=True,
    )


def _render_add_transaction(preferences: BudgetPreferences) -> None:
    """Render the transaction form and save on submit."""
    kind = TransactionKind(
        st.radio(
            "Type",
            [item.value for item in TransactionKind],
            horizontal=True,
        )
    )
    categories = _fetch_categories(kind)
    with st.form("add_transaction", clear_on_submit=True):
        title = st.text_input("Title")
        amount = st.number_input(
            f"Amount ({preferences.currency_code})",
            min_value=0.0,
            step=1.0,
        )
        category_name = st.selectbox(
            "Category",
            [category.name for category in categories],
        )
        day = st.date_input("Date")
        note = st.text_input("Note")
        submitted = st.form_submit_button("Save")
    if not submitted:
        return
    category = next(
        (item for item in categories if item.name == category_name),
        None,
    )
    settings = _get_settings()
    now = datetime.now(settings.zone)
    transaction = Transaction(
        title=title,
        amount=Decimal(str(amount)),
        kind=kind,
        date=datetime.combine(day, now.timetz()),
        category=(
            category.snapshot() if category else CategorySnapshot(name="")
        ),
        note=note,
    )
    try:
        build_save_transaction_use_case(settings).execute(transaction)
    except ValidationError as exc:
        st.error(exc.message)
        return
    st.cache_data.clear()
    st.success(f"Saved {transaction.title}.")


def _render_settings(preferences: BudgetPreferences) -> None:
    """Render the preferences form; nothing is stored until Save."""
    week_starts = [item.value for item in WeekStart]
    with st.form("settings"):
        currency_code = st.text_input(
            "Spending currency",
            preferences.currency_code,
        )
        budget_code = st.text_input(
            "Budget currency (blank = same as spending)",
            preferences.budget_currency_code or "",
        )
        envelope = st.number_input(
            "Monthly envelope",
            min_value=0.0,
            value=float(preferences.monthly_envelope),
            step=50.0,
        )
        week_start = st.selectbox(
            "Week starts on",
            week_starts,
            index=week_starts.index(preferences.week_start.value),
        )
        month_start_day = st.number_input(
            "Month starts on day",
            min_value=1,
            max_value=28,
            value=preferences.month_start_day,
        )
        submitted = st.form_submit_button("Save")
    if not submitted:
        return
    use_case = build_update_preferences_use_case(
        _get_settings(),
        conversion_cache=_get_conversion_cache(),
    )
    try:
        asyncio.run(
            use_case.execute(
                BudgetPreferences(
                    currency_code=currency_code,
                    budget_currency_code=budget_code or None,
                    monthly_envelope=Decimal(str(envelope)),
                    week_start=WeekStart(week_start),
                    month_start_day=int(month_start_day),
                )
            )
        )
    except ValidationError as exc:
        st.error(exc.message)
        return
    st.cache_data.clear()
    st.success("Preferences saved.")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Budget", layout="wide")
    st.title("Budget")

    try:
        preferences = _fetch_preferences()
    except StorageUnavailableError as exc:
        st.error(str(exc))
        return

    page = st.sidebar.selectbox("Page", PAGES)
    if preferences.has_dual_currency:
        cache = _get_conversion_cache()
        st.sidebar.caption(
            cache.rate_description(
                preferences.effective_budget_currency_code,
                preferences.currency_code,
            )
            + f" · {cache.state.status.value}"
        )

    try:
        if page == "Dashboard":
            if preferences.monthly_envelope <= 0:
                st.info("Set a monthly envelope in Settings to get started.")
            _render_dashboard(_load_budget_summary(schema_version=1))
        elif page == "Savings":
            _render_savings(_load_savings_history(schema_version=1))
        elif page == "Weekly Log":
            _render_weekly_log(_load_weekly_logs(schema_version=1))
        elif page == "Add Transaction":
            _render_add_transaction(preferences)
        else:
            _render_settings(preferences)
    except PersistenceError as exc:
        st.error(f"Could not reach the budget store: {exc}")


if __name__ == "__main__":  # pragma: no cover
    main()
