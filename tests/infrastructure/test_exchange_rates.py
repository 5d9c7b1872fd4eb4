"""Tests for the static exchange-rate provider."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import ExchangeRateUnavailableError, ValidationError
from src.infrastructure.exchange_rates import (
    StaticExchangeRateProvider,
    parse_static_rates,
)


def test_parse_static_rates_normalizes_codes() -> None:
    rates = parse_static_rates(" usd:mxn=20.45 , EUR:USD=1.08,")

    assert rates == {
        ("USD", "MXN"): Decimal("20.45"),
        ("EUR", "USD"): Decimal("1.08"),
    }


@pytest.mark.parametrize("raw", ["USD:MXN=abc", "USD:MXN=0", "USD:MXN=-2"])
def test_parse_static_rates_rejects_bad_rates(raw) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_static_rates(raw)

    assert excinfo.value.field == "BUDGET_STATIC_RATES"


def test_parse_static_rates_rejects_bad_codes() -> None:
    with pytest.raises(ValidationError):
        parse_static_rates("DOLLAR:MXN=20")


@pytest.mark.asyncio
async def test_fetch_rate_direct_and_inverse() -> None:
    provider = StaticExchangeRateProvider(
        {("USD", "MXN"): Decimal("20")},
        published_date="2025-02-18",
    )

    direct = await provider.fetch_rate("USD", "MXN")
    inverse = await provider.fetch_rate("MXN", "USD")

    assert direct.rate == Decimal("20")
    assert direct.published_date == "2025-02-18"
    assert inverse.rate == Decimal("0.05")


@pytest.mark.asyncio
async def test_fetch_rate_unknown_pair_raises() -> None:
    logger = MagicMock()
    provider = StaticExchangeRateProvider({}, logger=logger)

    with pytest.raises(ExchangeRateUnavailableError):
        await provider.fetch_rate("USD", "EUR")

    logger.warning.assert_called_once_with("No static rate for USD->EUR")


def test_from_env_string_with_empty_table() -> None:
    provider = StaticExchangeRateProvider.from_env_string("")

    assert isinstance(provider, StaticExchangeRateProvider)
