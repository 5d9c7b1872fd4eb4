"""Tests for the CurrencyConversionCache."""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.domain.errors import ExchangeRateUnavailableError, PersistenceError
from src.domain.models.currency import ConversionStatus, RateQuote
from src.domain.models.preferences import BudgetPreferences, WidgetDefaults


def _build_cache(
    preferences: BudgetPreferences | None = None,
    fetch_rate: AsyncMock | None = None,
) -> tuple[CurrencyConversionCache, MagicMock, MagicMock, MagicMock]:
    rate_port = MagicMock()
    rate_port.fetch_rate = fetch_rate or AsyncMock(
        return_value=RateQuote(Decimal("20.45"), "2025-02-18")
    )
    preferences_repository = MagicMock()
    preferences_repository.load_preferences.return_value = (
        preferences or BudgetPreferences()
    )
    logger = MagicMock()
    cache = CurrencyConversionCache(
        rate_port,
        preferences_repository,
        logger=logger,
    )
    return cache, rate_port, preferences_repository, logger


def _cached_preferences() -> BudgetPreferences:
    return BudgetPreferences(
        currency_code="MXN",
        budget_currency_code="USD",
        cached_exchange_rate=Decimal("19.90"),
        cached_rate_from="USD",
        cached_rate_to="MXN",
        cached_rate_published_date="2025-02-10",
    )


@pytest.mark.asyncio
async def test_identical_codes_reset_to_identity_without_fetch() -> None:
    """Same currency on both sides should never hit the rate port."""
    cache, rate_port, _, _ = _build_cache()

    await cache.refresh("usd", " USD ")

    assert cache.rate == Decimal("1")
    assert cache.state.status is ConversionStatus.IDLE
    assert cache.is_identity
    rate_port.fetch_rate.assert_not_awaited()


@pytest.mark.asyncio
async def test_successful_fetch_is_fresh_and_persisted() -> None:
    """A fetched rate becomes active and is stored for the next launch."""
    cache, rate_port, preferences_repository, _ = _build_cache()

    await cache.refresh("USD", "MXN")

    rate_port.fetch_rate.assert_awaited_once_with("USD", "MXN")
    assert cache.rate == Decimal("20.45")
    assert cache.state.status is ConversionStatus.FRESH
    assert cache.state.published_date == "2025-02-18"
    saved = preferences_repository.save_preferences.call_args.args[0]
    assert saved.cached_exchange_rate == Decimal("20.45")
    assert (saved.cached_rate_from, saved.cached_rate_to) == ("USD", "MXN")
    assert saved.cached_rate_published_date == "2025-02-18"


@pytest.mark.asyncio
async def test_failed_fetch_falls_back_to_cached_pair() -> None:
    """A cached rate for the same pair keeps calculations going as stale."""
    cache, _, _, logger = _build_cache(
        preferences=_cached_preferences(),
        fetch_rate=AsyncMock(
            side_effect=ExchangeRateUnavailableError("offline")
        ),
    )

    await cache.refresh("USD", "MXN")

    assert cache.rate == Decimal("19.90")
    assert cache.state.status is ConversionStatus.STALE
    assert cache.state.published_date == "2025-02-10"
    logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_failed_fetch_without_cache_is_unavailable() -> None:
    """Without a cached rate for the pair the identity rate is used."""
    cache, _, _, _ = _build_cache(
        preferences=_cached_preferences(),
        fetch_rate=AsyncMock(
            side_effect=ExchangeRateUnavailableError("offline")
        ),
    )

    await cache.refresh("EUR", "MXN")

    assert cache.rate == Decimal("1")
    assert cache.state.status is ConversionStatus.UNAVAILABLE


@pytest.mark.asyncio
async def test_refresh_for_same_pair_while_loading_is_ignored() -> None:
    """A second refresh for the in-flight pair should not fetch again."""
    release = asyncio.Event()

    async def slow_fetch(source, target):
        await release.wait()
        return RateQuote(Decimal("20.00"), "2025-02-18")

    fetch_rate = AsyncMock(side_effect=slow_fetch)
    cache, _, _, _ = _build_cache(fetch_rate=fetch_rate)

    first = asyncio.create_task(cache.refresh("USD", "MXN"))
    await asyncio.sleep(0)
    await cache.refresh("USD", "MXN")

    assert cache.state.status is ConversionStatus.LOADING
    release.set()
    await first

    assert fetch_rate.await_count == 1
    assert cache.state.status is ConversionStatus.FRESH


@pytest.mark.asyncio
async def test_persist_failure_is_logged_and_rate_still_used() -> None:
    cache, _, preferences_repository, logger = _build_cache()
    preferences_repository.save_preferences.side_effect = PersistenceError(
        "disk full"
    )

    await cache.refresh("USD", "MXN")

    assert cache.rate == Decimal("20.45")
    logger.error.assert_called_once()


def test_hydrates_stale_rate_from_preferences() -> None:
    """A rate stored by a previous run is usable before any fetch."""
    preferences = BudgetPreferences(
        currency_code="MXN",
        budget_currency_code="USD",
        cached_exchange_rate=Decimal("19.90"),
        cached_rate_from="USD",
        cached_rate_to="MXN",
    )
    cache, _, _, _ = _build_cache(preferences=preferences)

    assert cache.rate == Decimal("19.90")
    assert cache.state.status is ConversionStatus.STALE
    assert cache.state.published_date == "cached"
    assert cache.rate_for(preferences) == Decimal("19.90")


def test_rate_for_single_currency_is_one() -> None:
    cache, _, _, _ = _build_cache(preferences=_cached_preferences())

    assert cache.rate_for(BudgetPreferences(currency_code="MXN")) == 1


def test_rate_description() -> None:
    cache, _, _, _ = _build_cache(preferences=_cached_preferences())

    assert cache.rate_description("USD", "MXN") == "1 USD = 19.9000 MXN"


@pytest.mark.asyncio
async def test_unexpected_fetch_error_still_allows_retry() -> None:
    """Any fetch failure falls back, so later refreshes still fetch."""
    fetch_rate = AsyncMock(
        side_effect=[
            OSError("connection reset"),
            RateQuote(Decimal("20.10"), "2025-02-19"),
        ]
    )
    cache, _, _, logger = _build_cache(
        preferences=_cached_preferences(),
        fetch_rate=fetch_rate,
    )

    await cache.refresh("USD", "MXN")

    assert cache.state.status is ConversionStatus.STALE
    assert cache.rate == Decimal("19.90")
    logger.error.assert_called_once()

    await cache.refresh("USD", "MXN")

    assert fetch_rate.await_count == 2
    assert cache.state.status is ConversionStatus.FRESH
    assert cache.rate == Decimal("20.10")


@pytest.mark.asyncio
async def test_refresh_for_other_pair_wins_over_slower_one() -> None:
    """The latest requested pair owns the state; both quotes are stored."""
    release = asyncio.Event()

    async def fetch(source, target):
        if source == "USD":
            await release.wait()
            return RateQuote(Decimal("20.00"), "2025-02-17")
        return RateQuote(Decimal("21.80"), "2025-02-18")

    fetch_rate = AsyncMock(side_effect=fetch)
    cache, _, preferences_repository, _ = _build_cache(fetch_rate=fetch_rate)

    first = asyncio.create_task(cache.refresh("USD", "MXN"))
    await asyncio.sleep(0)
    await cache.refresh("EUR", "MXN")
    release.set()
    await first

    assert fetch_rate.await_count == 2
    assert cache.rate == Decimal("21.80")
    assert cache.state.status is ConversionStatus.FRESH
    assert cache.state.published_date == "2025-02-18"
    saved_pairs = [
        (call.args[0].cached_rate_from, call.args[0].cached_rate_to)
        for call in preferences_repository.save_preferences.call_args_list
    ]
    assert saved_pairs == [("EUR", "MXN"), ("USD", "MXN")]


@pytest.mark.asyncio
async def test_failure_of_superseded_pair_keeps_newer_state() -> None:
    release = asyncio.Event()

    async def fetch(source, target):
        if source == "USD":
            await release.wait()
            raise ExchangeRateUnavailableError("offline")
        return RateQuote(Decimal("21.80"), "2025-02-18")

    cache, _, _, _ = _build_cache(fetch_rate=AsyncMock(side_effect=fetch))

    first = asyncio.create_task(cache.refresh("USD", "MXN"))
    await asyncio.sleep(0)
    await cache.refresh("EUR", "MXN")
    release.set()
    await first

    assert cache.rate == Decimal("21.80")
    assert cache.state.status is ConversionStatus.FRESH


@pytest.mark.asyncio
async def test_fetched_rate_updates_widget_defaults() -> None:
    """The widget store follows every rate fetched for the active pair."""
    preferences = BudgetPreferences(
        currency_code="MXN",
        budget_currency_code="USD",
        monthly_envelope=Decimal("500"),
    )
    shared_defaults = MagicMock()
    shared_defaults.load_widget_defaults.return_value = WidgetDefaults(
        monthly_envelope=Decimal("500"),
        currency_code="MXN",
        conversion_rate=Decimal("20"),
    )
    preferences_repository = MagicMock()
    preferences_repository.load_preferences.return_value = preferences
    rate_port = MagicMock()
    rate_port.fetch_rate = AsyncMock(
        return_value=RateQuote(Decimal("25"), "2025-02-18")
    )
    cache = CurrencyConversionCache(
        rate_port,
        preferences_repository,
        shared_defaults=shared_defaults,
        logger=MagicMock(),
    )

    await cache.refresh_for(preferences)
    await cache.refresh("EUR", "MXN")

    shared_defaults.save_widget_defaults.assert_called_once_with(
        WidgetDefaults(
            monthly_envelope=Decimal("500"),
            currency_code="MXN",
            conversion_rate=Decimal("25"),
        )
    )
