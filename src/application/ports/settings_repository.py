"""Ports for persisted preferences and the widget settings mirror."""

from typing import Protocol

from src.domain.models.preferences import BudgetPreferences, WidgetDefaults


class PreferencesRepositoryPort(Protocol):
    """Port exposing the single preferences record."""

    def load_preferences(self) -> BudgetPreferences:
        """Return stored preferences, defaults when nothing is stored."""

    def save_preferences(self, preferences: BudgetPreferences) -> None:
        """Persist the full preferences record."""


class SharedDefaultsPort(Protocol):
    """Port exposing the lightweight key-value store read by the widget."""

    def load_widget_defaults(self) -> WidgetDefaults:
        """Return the mirrored settings, defaults when nothing is stored."""

    def save_widget_defaults(self, defaults: WidgetDefaults) -> None:
        """Overwrite the mirrored settings."""


__all__ = ["PreferencesRepositoryPort", "SharedDefaultsPort"]
