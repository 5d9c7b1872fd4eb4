"""Tests for the close_periods_cli adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from src.adapters import close_periods_cli
from src.application.use_cases.monthly_savings import SyncSnapshotsResult
from src.application.use_cases.weekly_log import CloseWeeksResult
from src.domain.models.preferences import BudgetPreferences


def test_main_closes_months_and_weeks(monkeypatch, capsys):
    """The CLI should refresh the rate once and share it with both runs."""
    cache = MagicMock()
    cache.refresh_for = AsyncMock()
    snapshots = MagicMock()
    snapshots.run.return_value = SyncSnapshotsResult(4, 2)
    weeks = MagicMock()
    weeks.run.return_value = CloseWeeksResult(10, 1)

    monkeypatch.setattr(close_periods_cli, "build_settings", lambda: "s")
    monkeypatch.setattr(
        close_periods_cli,
        "build_database_adapter",
        lambda settings: "db",
    )
    monkeypatch.setattr(
        close_periods_cli,
        "build_conversion_cache",
        lambda db, settings: cache,
    )
    monkeypatch.setattr(
        close_periods_cli,
        "build_preferences_repository",
        lambda db: SimpleNamespace(load_preferences=BudgetPreferences),
    )

    def _snapshots(settings, conversion_cache):
        assert conversion_cache is cache
        return snapshots

    def _weeks(settings, conversion_cache):
        assert conversion_cache is cache
        return weeks

    monkeypatch.setattr(
        close_periods_cli,
        "build_sync_snapshots_use_case",
        _snapshots,
    )
    monkeypatch.setattr(close_periods_cli, "build_close_weeks_use_case", _weeks)

    close_periods_cli.main()

    cache.refresh_for.assert_awaited_once()
    out = capsys.readouterr().out
    assert "Created 2 monthly snapshots (4 already stored)." in out
    assert "Closed 1 weeks (10 already logged)." in out
