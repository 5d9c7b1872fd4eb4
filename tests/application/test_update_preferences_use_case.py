"""Tests for the UpdatePreferencesUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.use_cases.update_preferences import (
    UpdatePreferencesUseCase,
)
from src.domain.errors import ValidationError
from src.domain.models.preferences import (
    BudgetPreferences,
    WeekStart,
    WidgetDefaults,
)


def _build_use_case(rate: str = "20"):
    preferences_repository = MagicMock()
    preferences_repository.load_preferences.return_value = BudgetPreferences(
        cached_exchange_rate=Decimal("19.5"),
        cached_rate_from="USD",
        cached_rate_to="MXN",
        cached_rate_published_date="2025-02-10",
    )
    shared_defaults = MagicMock()
    conversion_cache = MagicMock()
    conversion_cache.refresh = AsyncMock()
    conversion_cache.rate_for.return_value = Decimal(rate)
    use_case = UpdatePreferencesUseCase(
        preferences_repository,
        shared_defaults,
        conversion_cache,
        logger=MagicMock(),
    )
    return use_case, preferences_repository, shared_defaults, conversion_cache


@pytest.mark.asyncio
async def test_save_refreshes_rate_and_mirrors_widget_defaults() -> None:
    use_case, preferences_repository, shared_defaults, conversion_cache = (
        _build_use_case()
    )

    saved = await use_case.execute(
        BudgetPreferences(
            currency_code="mxn",
            budget_currency_code="usd",
            monthly_envelope=Decimal("3000"),
            week_start=WeekStart.MONDAY,
        )
    )

    assert saved.currency_code == "MXN"
    assert saved.cached_exchange_rate == Decimal("19.5")
    assert saved.cached_rate_published_date == "2025-02-10"
    preferences_repository.save_preferences.assert_called_once_with(saved)
    conversion_cache.refresh.assert_awaited_once_with("USD", "MXN")
    shared_defaults.save_widget_defaults.assert_called_once_with(
        WidgetDefaults(
            monthly_envelope=Decimal("3000"),
            currency_code="MXN",
            conversion_rate=Decimal("20"),
            week_start=WeekStart.MONDAY,
        )
    )


@pytest.mark.asyncio
async def test_mirror_never_stores_non_positive_rate() -> None:
    use_case, _, shared_defaults, _ = _build_use_case(rate="0")

    await use_case.execute(BudgetPreferences(currency_code="USD"))

    (defaults,), _ = shared_defaults.save_widget_defaults.call_args
    assert defaults.conversion_rate == Decimal("1")


@pytest.mark.asyncio
async def test_invalid_preferences_are_not_saved() -> None:
    use_case, preferences_repository, shared_defaults, conversion_cache = (
        _build_use_case()
    )

    with pytest.raises(ValidationError):
        await use_case.execute(BudgetPreferences(month_start_day=29))

    preferences_repository.save_preferences.assert_not_called()
    conversion_cache.refresh.assert_not_awaited()
    shared_defaults.save_widget_defaults.assert_not_called()
