"""Policy for accepted currency codes."""

from src.domain.errors import InvalidCurrencyCodeError
from src.domain.services.normalization import normalize_currency_code


def is_valid_currency_code(code: str | None) -> bool:
    """Return True when the code is three ASCII letters after normalization.

    Args:
        code: Raw currency code.

    Returns:
        bool: True for codes such as ``USD`` or `` mxn ``.
    """
    normalized = normalize_currency_code(code)
    if normalized is None or len(normalized) != 3:
        return False
    return normalized.isascii() and normalized.isalpha()


def parse_currency_code(code: str | None) -> str:
    """Return the normalized currency code or raise.

    Args:
        code: Raw currency code.

    Returns:
        str: Upper-case three-letter code.

    Raises:
        InvalidCurrencyCodeError: If the code is blank or malformed.
    """
    if not is_valid_currency_code(code):
        raise InvalidCurrencyCodeError(code or "")
    return normalize_currency_code(code)


def parse_optional_currency_code(code: str | None) -> str | None:
    """Like ``parse_currency_code`` but maps blank values to None."""
    if normalize_currency_code(code) is None:
        return None
    return parse_currency_code(code)


__all__ = [
    "is_valid_currency_code",
    "parse_currency_code",
    "parse_optional_currency_code",
]
