"""CLI adapter for quick expense entry from voice assistants and shortcuts.

Example:
    python -m src.adapters.add_expense_cli 12.50 "Coffee" --category Dining
"""

import argparse
from decimal import Decimal, InvalidOperation

from src.domain.errors import StorageUnavailableError, ValidationError
from src.infrastructure.container import (
    build_add_expense_use_case,
    build_database_adapter,
    build_preferences_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_usage_logger


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(
            f"'{value}' is not a number"
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the entry point."""
    parser = argparse.ArgumentParser(
        description="Quickly add a new expense to the budget.",
    )
    parser.add_argument("amount", type=_decimal, help="The expense amount")
    parser.add_argument("description", help="What was this expense for?")
    parser.add_argument(
        "--category",
        default=None,
        help="Expense category name; General when omitted or unknown",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Store one expense in the shared database."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_usage_logger()
    try:
        settings = build_settings()
    except StorageUnavailableError as exc:
        logger.error(str(exc))
        raise SystemExit(1) from exc

    preferences = build_preferences_repository(
        build_database_adapter(settings)
    ).load_preferences()
    use_case = build_add_expense_use_case(settings)
    try:
        result = use_case.execute(
            amount=args.amount,
            description=args.description,
            category_name=args.category,
            currency_code=preferences.currency_code,
        )
    except ValidationError as exc:
        parser.error(str(exc))
    print(result.message)


if __name__ == "__main__":  # pragma: no cover
    main()
