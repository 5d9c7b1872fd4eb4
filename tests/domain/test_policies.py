"""Tests for domain policies."""

import pytest

from src.domain.errors import InvalidCurrencyCodeError
from src.domain.models.ledger import Category, TransactionKind
from src.domain.policies import (
    is_duplicate_category_name,
    is_valid_currency_code,
    parse_currency_code,
    parse_optional_currency_code,
)


@pytest.mark.parametrize("code", ["USD", "mxn", " eur "])
def test_valid_currency_codes(code) -> None:
    assert is_valid_currency_code(code)


@pytest.mark.parametrize("code", [None, "", "US", "USDT", "U5D", "ÜSD"])
def test_invalid_currency_codes(code) -> None:
    assert not is_valid_currency_code(code)


def test_parse_currency_code_normalizes_or_raises() -> None:
    assert parse_currency_code(" mxn") == "MXN"
    with pytest.raises(InvalidCurrencyCodeError) as excinfo:
        parse_currency_code("pesos")
    assert excinfo.value.raw_code == "pesos"


def test_parse_optional_currency_code_maps_blank_to_none() -> None:
    assert parse_optional_currency_code("  ") is None
    assert parse_optional_currency_code(None) is None
    assert parse_optional_currency_code("usd") == "USD"


def test_duplicate_category_name_ignores_edited_category() -> None:
    dining = Category(name="Dining")
    existing = [dining, Category(name="Salary", kind=TransactionKind.INCOME)]

    assert is_duplicate_category_name("DINING", TransactionKind.EXPENSE,
                                      existing)
    assert not is_duplicate_category_name(
        "dining",
        TransactionKind.EXPENSE,
        existing,
        exclude_id=dining.id,
    )
    assert not is_duplicate_category_name(
        "salary", TransactionKind.EXPENSE, existing
    )
