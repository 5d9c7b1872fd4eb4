"""Conversion rate cache between the budget and spending currencies.

The cache keeps the last known rate with an explicit freshness state. It is
hydrated from the durable preferences on construction so dependent
calculations always have a rate, and refreshed through the exchange-rate
port. Rate semantics: units of ``to`` per one unit of ``from``.
"""

from dataclasses import replace
from decimal import Decimal

from src.application.ports.exchange_rates import ExchangeRatePort
from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
    SharedDefaultsPort,
)
from src.domain.errors import ExchangeRateUnavailableError, PersistenceError
from src.domain.models.currency import (
    ConversionState,
    ConversionStatus,
    RateQuote,
)
from src.domain.models.preferences import BudgetPreferences
from src.domain.services.normalization import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger


_ONE = Decimal("1")


class CurrencyConversionCache:
    """Hold the active conversion rate and its freshness state."""

    def __init__(
        self,
        rate_port: ExchangeRatePort,
        preferences_repository: PreferencesRepositoryPort,
        shared_defaults: SharedDefaultsPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the cache and hydrate it from stored preferences.

        Args:
            rate_port: Port fetching live exchange rates.
            preferences_repository: Port persisting the cached rate.
            shared_defaults: Optional widget key-value store whose
                conversion rate follows every fetched rate.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rate_port = rate_port
        self._preferences_repository = preferences_repository
        self._shared_defaults = shared_defaults
        self._logger = logger or get_app_logger()
        self._rate = _ONE
        self._state = ConversionState.idle()
        self._from_code = ""
        self._to_code = ""
        self._hydrate(preferences_repository.load_preferences())

    @property
    def rate(self) -> Decimal:
        return self._rate

    @property
    def state(self) -> ConversionState:
        return self._state

    @property
    def is_identity(self) -> bool:
        """True when no conversion applies to the active pair."""
        return (
            not self._from_code
            or not self._to_code
            or self._from_code == self._to_code
        )

    def rate_description(self, from_code: str, to_code: str) -> str:
        """Return a label such as ``1 USD = 20.4500 MXN``."""
        if self._rate <= 0:
            return "Rate unavailable"
        return f"1 {from_code} = {self._rate:.4f} {to_code}"

    def rate_for(self, preferences: BudgetPreferences) -> Decimal:
        """Rate to feed budget calculations for the given preferences."""
        if not preferences.has_dual_currency:
            return _ONE
        return self._rate

    async def refresh(self, from_code: str | None, to_code: str | None) -> None:
        """Fetch a fresh rate for the pair, falling back to the cache.

        Identical or blank codes reset the cache to the identity rate
        without a fetch. A refresh for the pair already loading is ignored.

        Args:
            from_code: Currency converted from (the budget currency).
            to_code: Currency converted to (the spending currency).
        """
        source = normalize_currency_code(from_code)
        target = normalize_currency_code(to_code)
        if not source or not target or source == target:
            self._rate = _ONE
            self._state = ConversionState.idle()
            return

        if (
            self._state.status is ConversionStatus.LOADING
            and (self._from_code, self._to_code) == (source, target)
        ):
            self._logger.info(
                f"Rate refresh for {source}->{target} already in flight"
            )
            return

        self._state = ConversionState.loading()
        self._from_code = source
        self._to_code = target

        try:
            quote = await self._rate_port.fetch_rate(source, target)
        except ExchangeRateUnavailableError as exc:
            self._logger.warning(
                f"Rate fetch failed for {source}->{target}: {exc}"
            )
            self._fall_back(source, target)
            return
        except Exception as exc:
            # A refresh always leaves the loading state.
            self._logger.error(
                f"Unexpected error fetching {source}->{target}: {exc!r}"
            )
            self._fall_back(source, target)
            return

        self._store(source, target, quote)
        if (self._from_code, self._to_code) != (source, target):
            # A refresh for another pair started meanwhile and owns the state.
            return
        self._rate = quote.rate
        self._state = ConversionState.fresh(quote.published_date)
        self._logger.info(
            f"Rate refreshed: 1 {source} = {quote.rate} {target} "
            f"({quote.published_date})"
        )

    async def refresh_for(self, preferences: BudgetPreferences) -> None:
        """Refresh the budget-to-spending pair of ``preferences``."""
        await self.refresh(
            preferences.effective_budget_currency_code,
            preferences.currency_code,
        )

    def _hydrate(self, preferences: BudgetPreferences) -> None:
        if (
            preferences.cached_exchange_rate <= 0
            or not preferences.cached_rate_from
            or not preferences.cached_rate_to
        ):
            return
        self._rate = preferences.cached_exchange_rate
        self._from_code = preferences.cached_rate_from
        self._to_code = preferences.cached_rate_to
        self._state = ConversionState.stale(
            preferences.cached_rate_published_date
        )

    def _store(self, source: str, target: str, quote: RateQuote) -> None:
        preferences = self._preferences_repository.load_preferences()
        try:
            self._preferences_repository.save_preferences(
                replace(
                    preferences,
                    cached_exchange_rate=quote.rate,
                    cached_rate_from=source,
                    cached_rate_to=target,
                    cached_rate_published_date=quote.published_date,
                )
            )
            self._mirror_rate(preferences, source, target, quote.rate)
        except PersistenceError as exc:
            self._logger.error(
                f"Could not persist rate {source}->{target}: {exc}"
            )

    def _mirror_rate(
        self,
        preferences: BudgetPreferences,
        source: str,
        target: str,
        rate: Decimal,
    ) -> None:
        if self._shared_defaults is None or not preferences.has_dual_currency:
            return
        active_pair = (
            normalize_currency_code(preferences.effective_budget_currency_code),
            normalize_currency_code(preferences.currency_code),
        )
        if active_pair != (source, target):
            return
        defaults = self._shared_defaults.load_widget_defaults()
        self._shared_defaults.save_widget_defaults(
            replace(defaults, conversion_rate=rate)
        )

    def _fall_back(self, source: str, target: str) -> None:
        if (self._from_code, self._to_code) != (source, target):
            return
        preferences = self._preferences_repository.load_preferences()
        cached = preferences.cached_rate_for(source, target)
        if cached is None:
            self._rate = _ONE
            self._state = ConversionState.unavailable()
            return
        self._rate = cached
        self._state = ConversionState.stale(
            preferences.cached_rate_published_date
        )


__all__ = ["CurrencyConversionCache"]
