"""SQLAlchemy-backed repositories for append-only history records."""

from uuid import UUID

from sqlalchemy import text

from src.application.ports.history_repository import (
    SavingsSnapshotsRepositoryPort,
    WeeklyLogsRepositoryPort,
)
from src.domain.models.history import MonthlySavingsSnapshot, WeeklyLog
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.sql_support import (
    SqlAlchemyRepository,
    from_iso,
    to_iso,
)
from src.utils.decimal_utils import coerce_decimal, decimal_to_text


SELECT_SNAPSHOTS_SQL = text(
    """
    SELECT id, month_start, month_end, budget_amount, spent_amount,
           exchange_rate, budget_currency_code, spending_currency_code,
           created_at
    FROM monthly_savings_snapshots
    """
)

INSERT_SNAPSHOT_SQL = text(
    """
    INSERT OR IGNORE INTO monthly_savings_snapshots (
        id, month_start, month_end, budget_amount, spent_amount,
        exchange_rate, budget_currency_code, spending_currency_code,
        created_at
    )
    VALUES (
        :id, :month_start, :month_end, :budget_amount, :spent_amount,
        :exchange_rate, :budget_currency_code, :spending_currency_code,
        :created_at
    )
    """
)

SELECT_WEEKLY_LOGS_SQL = text(
    """
    SELECT id, week_start, week_end, total_available, rolled_over_amount,
           unused_rolled_forward, goals_with_leftover, currency_code,
           created_at
    FROM weekly_logs
    """
)

INSERT_WEEKLY_LOG_SQL = text(
    """
    INSERT OR IGNORE INTO weekly_logs (
        id, week_start, week_end, total_available, rolled_over_amount,
        unused_rolled_forward, goals_with_leftover, currency_code,
        created_at
    )
    VALUES (
        :id, :week_start, :week_end, :total_available, :rolled_over_amount,
        :unused_rolled_forward, :goals_with_leftover, :currency_code,
        :created_at
    )
    """
)


class SqlAlchemySavingsSnapshotsRepository(
    SqlAlchemyRepository,
    SavingsSnapshotsRepositoryPort,
):
    """Repository for monthly savings snapshots.

    Snapshots are only ever inserted; no update or delete path exists.
    """

    def __init__(self, db_port, logger=None) -> None:
        super().__init__(db_port)
        self._logger = logger or get_app_logger()

    def fetch_snapshots(self) -> list[MonthlySavingsSnapshot]:
        """Return snapshots, newest month first."""
        snapshots = [
            MonthlySavingsSnapshot(
                id=UUID(row.id),
                month_start=from_iso(row.month_start),
                month_end=from_iso(row.month_end),
                budget_amount=coerce_decimal(row.budget_amount),
                spent_amount=coerce_decimal(row.spent_amount),
                exchange_rate=coerce_decimal(row.exchange_rate),
                budget_currency_code=row.budget_currency_code,
                spending_currency_code=row.spending_currency_code,
                created_at=from_iso(row.created_at),
            )
            for row in self._fetch_all(SELECT_SNAPSHOTS_SQL)
        ]
        return sorted(snapshots, key=lambda s: s.month_start, reverse=True)

    def add_snapshots(self, snapshots: list[MonthlySavingsSnapshot]) -> int:
        """Append snapshots and return how many were written.

        A snapshot for a month that already has one is skipped.
        """
        written = self._execute_each(
            INSERT_SNAPSHOT_SQL,
            [
                {
                    "id": str(snapshot.id),
                    "month_start": to_iso(snapshot.month_start),
                    "month_end": to_iso(snapshot.month_end),
                    "budget_amount": decimal_to_text(snapshot.budget_amount),
                    "spent_amount": decimal_to_text(snapshot.spent_amount),
                    "exchange_rate": decimal_to_text(snapshot.exchange_rate),
                    "budget_currency_code": snapshot.budget_currency_code,
                    "spending_currency_code": snapshot.spending_currency_code,
                    "created_at": to_iso(snapshot.created_at),
                }
                for snapshot in snapshots
            ],
        )
        self._logger.info(
            f"Inserted {written} rows into monthly_savings_snapshots"
        )
        return written


class SqlAlchemyWeeklyLogsRepository(
    SqlAlchemyRepository,
    WeeklyLogsRepositoryPort,
):
    """Repository for weekly log entries, insert only."""

    def __init__(self, db_port, logger=None) -> None:
        super().__init__(db_port)
        self._logger = logger or get_app_logger()

    def fetch_weekly_logs(self) -> list[WeeklyLog]:
        logs = [
            WeeklyLog(
                id=UUID(row.id),
                week_start=from_iso(row.week_start),
                week_end=from_iso(row.week_end),
                total_available=coerce_decimal(row.total_available),
                rolled_over_amount=coerce_decimal(row.rolled_over_amount),
                unused_rolled_forward=coerce_decimal(
                    row.unused_rolled_forward
                ),
                goals_with_leftover=row.goals_with_leftover,
                currency_code=row.currency_code,
                created_at=from_iso(row.created_at),
            )
            for row in self._fetch_all(SELECT_WEEKLY_LOGS_SQL)
        ]
        return sorted(logs, key=lambda log: log.week_start, reverse=True)

    def add_weekly_logs(self, logs: list[WeeklyLog]) -> int:
        written = self._execute_each(
            INSERT_WEEKLY_LOG_SQL,
            [
                {
                    "id": str(log.id),
                    "week_start": to_iso(log.week_start),
                    "week_end": to_iso(log.week_end),
                    "total_available": decimal_to_text(log.total_available),
                    "rolled_over_amount": decimal_to_text(
                        log.rolled_over_amount
                    ),
                    "unused_rolled_forward": decimal_to_text(
                        log.unused_rolled_forward
                    ),
                    "goals_with_leftover": log.goals_with_leftover,
                    "currency_code": log.currency_code,
                    "created_at": to_iso(log.created_at),
                }
                for log in logs
            ],
        )
        self._logger.info(f"Inserted {written} rows into weekly_logs")
        return written


__all__ = [
    "SqlAlchemySavingsSnapshotsRepository",
    "SqlAlchemyWeeklyLogsRepository",
]
