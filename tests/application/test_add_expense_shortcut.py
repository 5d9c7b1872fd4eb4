"""Tests for the AddExpenseShortcutUseCase."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.add_expense_shortcut import (
    AddExpenseShortcutUseCase,
)
from src.domain.constants import SHORTCUT_NOTE
from src.domain.errors import ValidationError
from src.domain.models.ledger import Category, TransactionKind


NOW = datetime(2025, 2, 19, 8, 30, tzinfo=timezone.utc)


def _build_use_case():
    transactions_repository = MagicMock()
    categories_repository = MagicMock()
    categories_repository.fetch_categories.return_value = [
        Category(name="Dining Out", icon="fork.knife", color="#FF9800"),
    ]
    logger = MagicMock()
    use_case = AddExpenseShortcutUseCase(
        transactions_repository,
        categories_repository,
        logger=logger,
    )
    return use_case, transactions_repository, categories_repository, logger


def test_matches_category_ignoring_case() -> None:
    use_case, transactions_repository, categories_repository, _ = (
        _build_use_case()
    )

    result = use_case.execute(
        Decimal("12.5"),
        "Coffee",
        category_name="dining out",
        currency_code="MXN",
        now=NOW,
    )

    categories_repository.fetch_categories.assert_called_once_with(
        kind=TransactionKind.EXPENSE
    )
    transaction = result.transaction
    assert transaction.category.name == "Dining Out"
    assert transaction.category.icon == "fork.knife"
    assert transaction.note == SHORTCUT_NOTE
    assert transaction.date == NOW
    assert transaction.kind is TransactionKind.EXPENSE
    assert result.message == "Added 12.50 MXN expense for Coffee"
    transactions_repository.save_transaction.assert_called_once_with(
        transaction
    )


def test_unknown_category_falls_back_to_general() -> None:
    use_case, _, _, logger = _build_use_case()

    result = use_case.execute(
        Decimal("4"), "Parking", category_name="Cars", now=NOW
    )

    assert result.transaction.category.name == "General"
    logger.warning.assert_called_once()


def test_blank_category_skips_lookup() -> None:
    use_case, _, categories_repository, logger = _build_use_case()

    result = use_case.execute(Decimal("4"), "Parking", now=NOW)

    assert result.transaction.category.name == "General"
    categories_repository.fetch_categories.assert_not_called()
    logger.warning.assert_not_called()


def test_invalid_amount_is_rejected() -> None:
    use_case, transactions_repository, _, _ = _build_use_case()

    with pytest.raises(ValidationError):
        use_case.execute(Decimal("-3"), "Parking", now=NOW)

    transactions_repository.save_transaction.assert_not_called()
