"""Tests for the add_expense_cli adapter."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters import add_expense_cli
from src.domain.errors import ValidationError
from src.domain.models.preferences import BudgetPreferences


def _patch_container(monkeypatch, use_case) -> None:
    monkeypatch.setattr(add_expense_cli, "build_settings", lambda: "s")
    monkeypatch.setattr(
        add_expense_cli,
        "build_database_adapter",
        lambda settings: "db",
    )
    monkeypatch.setattr(
        add_expense_cli,
        "build_preferences_repository",
        lambda db: SimpleNamespace(
            load_preferences=lambda: BudgetPreferences(currency_code="MXN")
        ),
    )
    monkeypatch.setattr(
        add_expense_cli,
        "build_add_expense_use_case",
        lambda settings: use_case,
    )
    monkeypatch.setattr(add_expense_cli, "get_usage_logger", MagicMock)


def test_parser_reads_amount_description_and_category() -> None:
    args = add_expense_cli.build_parser().parse_args(
        ["12.50", "Coffee", "--category", "Dining Out"]
    )

    assert args.amount == Decimal("12.50")
    assert args.description == "Coffee"
    assert args.category == "Dining Out"


def test_parser_rejects_non_numeric_amount(capsys) -> None:
    with pytest.raises(SystemExit):
        add_expense_cli.build_parser().parse_args(["lots", "Coffee"])

    assert "is not a number" in capsys.readouterr().err


def test_main_stores_expense_and_prints_message(monkeypatch, capsys) -> None:
    use_case = MagicMock()
    use_case.execute.return_value = SimpleNamespace(
        message="Added 12.50 MXN expense for Coffee"
    )
    _patch_container(monkeypatch, use_case)

    add_expense_cli.main(["12.50", "Coffee"])

    use_case.execute.assert_called_once_with(
        amount=Decimal("12.50"),
        description="Coffee",
        category_name=None,
        currency_code="MXN",
    )
    assert capsys.readouterr().out.strip() == (
        "Added 12.50 MXN expense for Coffee"
    )


def test_main_reports_validation_errors(monkeypatch, capsys) -> None:
    use_case = MagicMock()
    use_case.execute.side_effect = ValidationError(
        "amount", "must be greater than zero"
    )
    _patch_container(monkeypatch, use_case)

    with pytest.raises(SystemExit) as excinfo:
        add_expense_cli.main(["0", "Coffee"])

    assert excinfo.value.code == 2
    assert "amount: must be greater than zero" in capsys.readouterr().err
