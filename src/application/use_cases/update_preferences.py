"""Use case for the explicit save of budget preferences."""

from dataclasses import replace
from decimal import Decimal

from src.application.ports.settings_repository import (
    PreferencesRepositoryPort,
    SharedDefaultsPort,
)
from src.application.use_cases.currency_conversion import (
    CurrencyConversionCache,
)
from src.domain.models.preferences import BudgetPreferences, WidgetDefaults
from src.domain.services.validation import validate_preferences
from src.infrastructure.logging.logger import get_app_logger


class UpdatePreferencesUseCase:
    """Persist preferences and refresh the widget's key-value mirror.

    Only this explicit save writes preferences; nothing is persisted while a
    form is being edited.
    """

    def __init__(
        self,
        preferences_repository: PreferencesRepositoryPort,
        shared_defaults: SharedDefaultsPort,
        conversion_cache: CurrencyConversionCache,
        logger=None,
    ) -> None:
        self._preferences_repository = preferences_repository
        self._shared_defaults = shared_defaults
        self._conversion_cache = conversion_cache
        self._logger = logger or get_app_logger()

    async def execute(self, preferences: BudgetPreferences) -> BudgetPreferences:
        """Validate, store and mirror the preferences.

        The conversion rate is refreshed for the saved currency pair before
        the widget mirror is written, so the widget sees the new rate.

        Raises:
            ValidationError: If currency codes, envelope or month start day
                are invalid.
        """
        valid = validate_preferences(preferences)
        stored = self._preferences_repository.load_preferences()
        # The cached rate fields are owned by the conversion cache.
        valid = replace(
            valid,
            cached_exchange_rate=stored.cached_exchange_rate,
            cached_rate_from=stored.cached_rate_from,
            cached_rate_to=stored.cached_rate_to,
            cached_rate_published_date=stored.cached_rate_published_date,
        )
        self._preferences_repository.save_preferences(valid)
        await self._conversion_cache.refresh(
            valid.effective_budget_currency_code,
            valid.currency_code,
        )
        self._shared_defaults.save_widget_defaults(self._mirror(valid))
        self._logger.info(
            f"Saved preferences: envelope {valid.monthly_envelope} "
            f"{valid.effective_budget_currency_code}, "
            f"spending in {valid.currency_code}"
        )
        return valid

    def _mirror(self, preferences: BudgetPreferences) -> WidgetDefaults:
        rate = self._conversion_cache.rate_for(preferences)
        return WidgetDefaults(
            monthly_envelope=preferences.monthly_envelope,
            currency_code=preferences.currency_code,
            conversion_rate=rate if rate > 0 else Decimal("1"),
            week_start=preferences.week_start,
        )


__all__ = ["UpdatePreferencesUseCase"]
