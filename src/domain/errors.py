"""Domain error taxonomy for the budget application."""


class BudgetError(Exception):
    """Base class for errors raised by the budget application."""


class ValidationError(BudgetError, ValueError):
    """User-entered data failed validation and was not saved.

    Attributes:
        field: Name of the offending form field.
        message: Human-readable explanation shown inline.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidCurrencyCodeError(ValidationError):
    """A currency code is not a three-letter ISO 4217 style code."""

    def __init__(self, raw_code: str) -> None:
        super().__init__(
            "currency_code",
            f"'{raw_code}' is not a valid three-letter currency code",
        )
        self.raw_code = raw_code


class PersistenceError(BudgetError):
    """A read or write against the shared store failed."""


class ExchangeRateUnavailableError(BudgetError):
    """The exchange-rate collaborator could not provide a rate."""


class StorageUnavailableError(BudgetError, RuntimeError):
    """The shared container holding the data store cannot be reached."""


__all__ = [
    "BudgetError",
    "ValidationError",
    "InvalidCurrencyCodeError",
    "PersistenceError",
    "ExchangeRateUnavailableError",
    "StorageUnavailableError",
]
