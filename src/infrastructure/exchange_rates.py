"""Exchange-rate adapters.

Only a fixed-table provider ships; it serves offline use and tests.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Mapping

from src.application.ports.exchange_rates import ExchangeRatePort
from src.domain.errors import ExchangeRateUnavailableError, ValidationError
from src.domain.models.currency import RateQuote
from src.domain.policies.currency_codes import parse_currency_code
from src.infrastructure.logging.logger import get_app_logger


def parse_static_rates(raw: str) -> dict[tuple[str, str], Decimal]:
    """Parse ``USD:MXN=20.45,EUR:USD=1.08`` into a rate table.

    Args:
        raw: Comma-separated ``FROM:TO=rate`` entries.

    Returns:
        dict[tuple[str, str], Decimal]: Rates keyed by (from, to) codes.

    Raises:
        ValidationError: If an entry is malformed or its rate is not positive.
    """
    rates: dict[tuple[str, str], Decimal] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        pair, _, raw_rate = entry.partition("=")
        source, _, target = pair.partition(":")
        try:
            rate = Decimal(raw_rate.strip())
        except InvalidOperation as exc:
            raise ValidationError(
                "BUDGET_STATIC_RATES",
                f"invalid rate in '{entry}'",
            ) from exc
        if rate <= 0:
            raise ValidationError(
                "BUDGET_STATIC_RATES",
                f"rate must be positive in '{entry}'",
            )
        rates[(parse_currency_code(source), parse_currency_code(target))] = rate
    return rates


class StaticExchangeRateProvider(ExchangeRatePort):
    """Serve rates from a fixed table.

    A pair missing from the table is answered with the inverse of the
    opposite pair when that one is known.
    """

    def __init__(
        self,
        rates: Mapping[tuple[str, str], Decimal],
        published_date: str | None = None,
        logger=None,
    ) -> None:
        """Initialize the provider.

        Args:
            rates: Units of ``to`` per one ``from``, keyed by (from, to).
            published_date: Label reported with every quote; today's ISO
                date when omitted.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rates = dict(rates)
        self._published_date = published_date
        self._logger = logger or get_app_logger()

    @classmethod
    def from_env_string(cls, raw: str) -> "StaticExchangeRateProvider":
        return cls(parse_static_rates(raw))

    async def fetch_rate(self, from_code: str, to_code: str) -> RateQuote:
        """Return units of ``to_code`` per one unit of ``from_code``.

        Raises:
            ExchangeRateUnavailableError: If neither direction is known.
        """
        published = self._published_date or date.today().isoformat()
        direct = self._rates.get((from_code, to_code))
        if direct is not None:
            return RateQuote(rate=direct, published_date=published)
        inverse = self._rates.get((to_code, from_code))
        if inverse is not None:
            return RateQuote(rate=Decimal("1") / inverse, published_date=published)
        self._logger.warning(f"No static rate for {from_code}->{to_code}")
        raise ExchangeRateUnavailableError(
            f"No rate configured for {from_code}->{to_code}"
        )


__all__ = ["parse_static_rates", "StaticExchangeRateProvider"]
