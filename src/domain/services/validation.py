"""Domain validation helpers for user-entered records.

Each validator returns a normalized copy of its input or raises
``ValidationError`` naming the offending field.
"""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from src.domain.errors import ValidationError
from src.domain.models.ledger import (
    Category,
    Goal,
    RecurringBill,
    Transaction,
)
from src.domain.models.preferences import BudgetPreferences
from src.domain.policies.category_names import is_duplicate_category_name
from src.domain.policies.currency_codes import (
    parse_currency_code,
    parse_optional_currency_code,
)
from src.domain.services.normalization import normalize_name
from src.domain.services.period_calendar import (
    MAX_MONTH_START_DAY,
    MIN_MONTH_START_DAY,
)


def _require_name(field: str, value: str) -> str:
    name = normalize_name(value)
    if not name:
        raise ValidationError(field, "must not be empty")
    return name


def _require_positive(field: str, value: Decimal) -> None:
    if value is None or value <= 0:
        raise ValidationError(field, "must be greater than zero")


def validate_transaction(transaction: Transaction) -> Transaction:
    """Check title, amount and category of a transaction."""
    title = _require_name("title", transaction.title)
    _require_positive("amount", transaction.amount)
    if not normalize_name(transaction.category.name):
        raise ValidationError("category", "a category must be selected")
    if transaction.date.tzinfo is None:
        raise ValidationError("date", "must be timezone-aware")
    return replace(transaction, title=title)


def validate_category(
    category: Category,
    existing: Iterable[Category],
) -> Category:
    """Check a category name is present and unique within its kind."""
    name = _require_name("name", category.name)
    if is_duplicate_category_name(
        name,
        category.kind,
        existing,
        exclude_id=category.id,
    ):
        raise ValidationError(
            "name",
            "A category with this name already exists. "
            "Please choose a different name.",
        )
    return replace(category, name=name)


def validate_recurring_bill(bill: RecurringBill) -> RecurringBill:
    """Check name, amount and category of a recurring bill."""
    name = _require_name("name", bill.name)
    _require_positive("amount", bill.amount)
    if not normalize_name(bill.category.name):
        raise ValidationError("category", "a category must be selected")
    return replace(bill, name=name)


def validate_goal(goal: Goal) -> Goal:
    """Check category and spending limit of a goal."""
    category_name = _require_name("category_name", goal.category_name)
    _require_positive("spending_limit", goal.spending_limit)
    return replace(goal, category_name=category_name)


def validate_preferences(preferences: BudgetPreferences) -> BudgetPreferences:
    """Normalize currency codes and check envelope and month start day."""
    currency_code = parse_currency_code(preferences.currency_code)
    budget_code = parse_optional_currency_code(
        preferences.budget_currency_code
    )
    if preferences.monthly_envelope < 0:
        raise ValidationError("monthly_envelope", "must not be negative")
    if not (
        MIN_MONTH_START_DAY
        <= preferences.month_start_day
        <= MAX_MONTH_START_DAY
    ):
        raise ValidationError(
            "month_start_day",
            f"must be between {MIN_MONTH_START_DAY} and {MAX_MONTH_START_DAY}",
        )
    return replace(
        preferences,
        currency_code=currency_code,
        budget_currency_code=budget_code,
    )


__all__ = [
    "validate_transaction",
    "validate_category",
    "validate_recurring_bill",
    "validate_goal",
    "validate_preferences",
]
