"""Ports for append-only history records."""

from typing import Protocol

from src.domain.models.history import MonthlySavingsSnapshot, WeeklyLog


class SavingsSnapshotsRepositoryPort(Protocol):
    """Port exposing monthly savings snapshots."""

    def fetch_snapshots(self) -> list[MonthlySavingsSnapshot]:
        """Return snapshots, newest month first."""

    def add_snapshots(self, snapshots: list[MonthlySavingsSnapshot]) -> int:
        """Append snapshots and return how many were written."""


class WeeklyLogsRepositoryPort(Protocol):
    """Port exposing weekly log entries."""

    def fetch_weekly_logs(self) -> list[WeeklyLog]:
        """Return weekly logs, newest week first."""

    def add_weekly_logs(self, logs: list[WeeklyLog]) -> int:
        """Append logs and return how many were written."""


__all__ = ["SavingsSnapshotsRepositoryPort", "WeeklyLogsRepositoryPort"]
