"""Quick expense entry used by voice assistants and shortcuts.

The entry point runs outside the dashboard process and writes straight into
the shared store; usage is recorded through the usage logger.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import Decimal

from src.application.ports.ledger_repository import (
    CategoriesRepositoryPort,
    TransactionsRepositoryPort,
)
from src.domain.constants import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    FALLBACK_CATEGORY_NAME,
    SHORTCUT_NOTE,
)
from src.domain.models.ledger import (
    CategorySnapshot,
    Transaction,
    TransactionKind,
)
from src.domain.services.normalization import normalize_name
from src.domain.services.validation import validate_transaction
from src.infrastructure.logging.logger import get_usage_logger
from src.utils.time_utils import resolve_now


@dataclass(frozen=True)
class ShortcutExpenseResult:
    """Outcome of a shortcut entry.

    Attributes:
        transaction: Stored expense.
        message: Confirmation spoken or shown to the user.
    """

    transaction: Transaction
    message: str


class AddExpenseShortcutUseCase:
    """Create one expense dated now from a category chosen by name."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        categories_repository: CategoriesRepositoryPort,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port storing transactions.
            categories_repository: Port listing expense categories.
            logger: Optional logger; the usage logger when omitted.
            tz: Zone the entry is dated in; UTC when omitted.
        """
        self._transactions_repository = transactions_repository
        self._categories_repository = categories_repository
        self._logger = logger or get_usage_logger()
        self._tz = tz

    def execute(
        self,
        amount: Decimal,
        description: str,
        category_name: str | None = None,
        currency_code: str = "USD",
        now: datetime | None = None,
    ) -> ShortcutExpenseResult:
        """Store the expense.

        Args:
            amount: Amount spent, in spending currency.
            description: What the expense was for.
            category_name: Expense category to match, ignoring case.
            currency_code: Currency used in the confirmation message.
            now: Date of the expense; the current time when omitted.

        Returns:
            ShortcutExpenseResult: Stored expense and confirmation message.

        Raises:
            ValidationError: If description or amount are invalid.
        """
        category = self._resolve_category(category_name)
        transaction = validate_transaction(
            Transaction(
                title=description,
                amount=amount,
                kind=TransactionKind.EXPENSE,
                date=resolve_now(now, self._tz),
                category=category,
                note=SHORTCUT_NOTE,
            )
        )
        self._transactions_repository.save_transaction(transaction)
        self._logger.info(
            f"Shortcut expense {transaction.amount} {currency_code} "
            f"in {category.name}"
        )
        return ShortcutExpenseResult(
            transaction=transaction,
            message=(
                f"Added {transaction.amount:.2f} {currency_code} expense "
                f"for {transaction.title}"
            ),
        )

    def _resolve_category(self, category_name: str | None) -> CategorySnapshot:
        wanted = normalize_name(category_name).casefold()
        if wanted:
            categories = self._categories_repository.fetch_categories(
                kind=TransactionKind.EXPENSE
            )
            for category in categories:
                if category.name.casefold() == wanted:
                    return category.snapshot()
            self._logger.warning(
                f"Unknown category '{category_name}', "
                f"using {FALLBACK_CATEGORY_NAME}"
            )
        return CategorySnapshot(
            name=FALLBACK_CATEGORY_NAME,
            icon=DEFAULT_CATEGORY_ICON,
            color=DEFAULT_CATEGORY_COLOR,
        )


__all__ = ["ShortcutExpenseResult", "AddExpenseShortcutUseCase"]
