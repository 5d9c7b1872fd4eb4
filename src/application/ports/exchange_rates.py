"""Port for the exchange-rate collaborator."""

from typing import Protocol

from src.domain.models.currency import RateQuote


class ExchangeRatePort(Protocol):
    """Port returning the latest rate between two currencies."""

    async def fetch_rate(self, from_code: str, to_code: str) -> RateQuote:
        """Return units of ``to_code`` per one unit of ``from_code``.

        Raises:
            ExchangeRateUnavailableError: If no rate can be obtained.
        """


__all__ = ["ExchangeRatePort"]
