"""Tests for record validation."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.domain.errors import InvalidCurrencyCodeError, ValidationError
from src.domain.models.ledger import (
    BillFrequency,
    Category,
    CategorySnapshot,
    Goal,
    RecurringBill,
    Transaction,
    TransactionKind,
)
from src.domain.models.preferences import BudgetPreferences
from src.domain.services.validation import (
    validate_category,
    validate_goal,
    validate_preferences,
    validate_recurring_bill,
    validate_transaction,
)


def _transaction(**overrides) -> Transaction:
    values = {
        "title": "  Coffee  ",
        "amount": Decimal("3.50"),
        "kind": TransactionKind.EXPENSE,
        "date": datetime(2025, 2, 19, 8, 0, tzinfo=timezone.utc),
        "category": CategorySnapshot(name="Dining"),
    }
    values.update(overrides)
    return Transaction(**values)


def test_transaction_title_is_trimmed() -> None:
    assert validate_transaction(_transaction()).title == "Coffee"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"title": "   "}, "title"),
        ({"amount": Decimal("0")}, "amount"),
        ({"amount": Decimal("-1")}, "amount"),
        ({"category": CategorySnapshot(name="")}, "category"),
        ({"date": datetime(2025, 2, 19, 8, 0)}, "date"),
    ],
)
def test_invalid_transactions_name_the_field(overrides, field) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_transaction(_transaction(**overrides))

    assert excinfo.value.field == field


def test_category_duplicate_is_case_insensitive_within_kind() -> None:
    existing = [Category(name="Groceries")]

    with pytest.raises(ValidationError) as excinfo:
        validate_category(Category(name=" groceries "), existing)

    assert "already exists" in excinfo.value.message


def test_category_same_name_in_other_kind_is_allowed() -> None:
    existing = [Category(name="Gifts", kind=TransactionKind.EXPENSE)]

    category = validate_category(
        Category(name="Gifts ", kind=TransactionKind.INCOME),
        existing,
    )

    assert category.name == "Gifts"


def test_category_can_keep_its_own_name_when_edited() -> None:
    original = Category(name="Travel")

    assert validate_category(original, [original]) == original


def test_blank_category_name_is_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_category(Category(name=" "), [])


def test_recurring_bill_requires_positive_amount() -> None:
    bill = RecurringBill(
        name="Gym",
        amount=Decimal("0"),
        frequency=BillFrequency.MONTHLY,
        category=CategorySnapshot(name="Health"),
    )

    with pytest.raises(ValidationError):
        validate_recurring_bill(bill)


def test_goal_requires_category_and_positive_limit() -> None:
    with pytest.raises(ValidationError):
        validate_goal(Goal(category_name="", spending_limit=Decimal("10")))
    with pytest.raises(ValidationError):
        validate_goal(Goal(category_name="Gas", spending_limit=Decimal("0")))


def test_preferences_normalize_currency_codes() -> None:
    preferences = validate_preferences(
        BudgetPreferences(currency_code=" mxn ", budget_currency_code="usd")
    )

    assert preferences.currency_code == "MXN"
    assert preferences.budget_currency_code == "USD"
    assert preferences.has_dual_currency


def test_preferences_blank_budget_currency_means_single_currency() -> None:
    preferences = validate_preferences(
        BudgetPreferences(currency_code="EUR", budget_currency_code="  ")
    )

    assert preferences.budget_currency_code is None
    assert preferences.effective_budget_currency_code == "EUR"
    assert not preferences.has_dual_currency


def test_preferences_reject_bad_values() -> None:
    with pytest.raises(InvalidCurrencyCodeError):
        validate_preferences(BudgetPreferences(currency_code="DOLLARS"))
    with pytest.raises(ValidationError):
        validate_preferences(
            BudgetPreferences(monthly_envelope=Decimal("-5"))
        )
    with pytest.raises(ValidationError):
        validate_preferences(BudgetPreferences(month_start_day=30))
