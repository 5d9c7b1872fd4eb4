"""Table definitions of the shared budget database.

Amounts are stored as TEXT to keep Decimal precision. Instants are stored as
ISO-8601 strings carrying their UTC offset. History tables hold one row per
period start.
"""

from sqlalchemy.engine import Engine


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        amount TEXT NOT NULL,
        kind TEXT NOT NULL,
        date TEXT NOT NULL,
        note TEXT NOT NULL DEFAULT '',
        category_name TEXT NOT NULL,
        category_icon TEXT NOT NULL,
        category_color TEXT NOT NULL,
        recurring_bill_id TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        kind TEXT NOT NULL,
        icon TEXT NOT NULL,
        color TEXT NOT NULL,
        is_default INTEGER NOT NULL DEFAULT 0,
        sort_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recurring_bills (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        amount TEXT NOT NULL,
        frequency TEXT NOT NULL,
        category_name TEXT NOT NULL,
        category_icon TEXT NOT NULL,
        category_color TEXT NOT NULL,
        start_date TEXT,
        is_active INTEGER NOT NULL DEFAULT 1,
        notes TEXT NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS goals (
        id TEXT PRIMARY KEY,
        category_name TEXT NOT NULL,
        spending_limit TEXT NOT NULL,
        period TEXT NOT NULL,
        notes TEXT NOT NULL DEFAULT '',
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monthly_savings_snapshots (
        id TEXT PRIMARY KEY,
        month_start TEXT NOT NULL,
        month_end TEXT NOT NULL,
        budget_amount TEXT NOT NULL,
        spent_amount TEXT NOT NULL,
        exchange_rate TEXT NOT NULL,
        budget_currency_code TEXT NOT NULL,
        spending_currency_code TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS weekly_logs (
        id TEXT PRIMARY KEY,
        week_start TEXT NOT NULL,
        week_end TEXT NOT NULL,
        total_available TEXT NOT NULL,
        rolled_over_amount TEXT NOT NULL,
        unused_rolled_forward TEXT NOT NULL,
        goals_with_leftover INTEGER NOT NULL,
        currency_code TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS ux_monthly_savings_month_start
    ON monthly_savings_snapshots (month_start)
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS ux_weekly_logs_week_start
    ON weekly_logs (week_start)
    """,
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS shared_defaults (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
)


def ensure_schema(engine: Engine) -> None:
    """Create every missing table of the budget database.

    Args:
        engine: SQLAlchemy engine connected to the shared store.
    """
    with engine.begin() as conn:
        for statement in CREATE_TABLES_SQL:
            conn.exec_driver_sql(statement)


__all__ = ["CREATE_TABLES_SQL", "ensure_schema"]
