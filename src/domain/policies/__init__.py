"""Domain policies package."""

from .category_names import is_duplicate_category_name
from .currency_codes import (
    is_valid_currency_code,
    parse_currency_code,
    parse_optional_currency_code,
)

__all__ = [
    "is_duplicate_category_name",
    "is_valid_currency_code",
    "parse_currency_code",
    "parse_optional_currency_code",
]
