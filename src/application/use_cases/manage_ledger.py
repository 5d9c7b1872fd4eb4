"""Use cases for saving and deleting transactions, bills and goals.

Each save validates the record first, so nothing reaches storage when a
form is invalid.
"""

from uuid import UUID

from src.application.ports.ledger_repository import (
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from src.domain.models.ledger import Goal, RecurringBill, Transaction
from src.domain.services.validation import (
    validate_goal,
    validate_recurring_bill,
    validate_transaction,
)
from src.infrastructure.logging.logger import get_app_logger


class SaveTransactionUseCase:
    """Validate and store a transaction."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()

    def execute(self, transaction: Transaction) -> Transaction:
        """Store the transaction and return the normalized record.

        Raises:
            ValidationError: If title, amount or category are invalid.
        """
        valid = validate_transaction(transaction)
        self._transactions_repository.save_transaction(valid)
        self._logger.info(
            f"Saved {valid.kind.value} '{valid.title}' "
            f"of {valid.amount} in {valid.category_name}"
        )
        return valid


class DeleteTransactionUseCase:
    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()

    def execute(self, transaction_id: UUID) -> None:
        self._transactions_repository.delete_transaction(transaction_id)
        self._logger.info(f"Deleted transaction {transaction_id}")


class SaveRecurringBillUseCase:
    """Validate and store a recurring bill."""

    def __init__(
        self,
        bills_repository: RecurringBillsRepositoryPort,
        logger=None,
    ) -> None:
        self._bills_repository = bills_repository
        self._logger = logger or get_app_logger()

    def execute(self, bill: RecurringBill) -> RecurringBill:
        valid = validate_recurring_bill(bill)
        self._bills_repository.save_recurring_bill(valid)
        self._logger.info(
            f"Saved {valid.frequency.value} bill '{valid.name}' "
            f"({valid.monthly_equivalent:.2f} per month)"
        )
        return valid


class DeleteRecurringBillUseCase:
    def __init__(
        self,
        bills_repository: RecurringBillsRepositoryPort,
        logger=None,
    ) -> None:
        self._bills_repository = bills_repository
        self._logger = logger or get_app_logger()

    def execute(self, bill_id: UUID) -> None:
        self._bills_repository.delete_recurring_bill(bill_id)
        self._logger.info(f"Deleted recurring bill {bill_id}")


class SaveGoalUseCase:
    """Validate and store a spending goal."""

    def __init__(self, goals_repository: GoalsRepositoryPort, logger=None):
        self._goals_repository = goals_repository
        self._logger = logger or get_app_logger()

    def execute(self, goal: Goal) -> Goal:
        valid = validate_goal(goal)
        self._goals_repository.save_goal(valid)
        self._logger.info(
            f"Saved {valid.period.value} goal for {valid.category_name} "
            f"with limit {valid.spending_limit}"
        )
        return valid


class DeleteGoalUseCase:
    def __init__(self, goals_repository: GoalsRepositoryPort, logger=None):
        self._goals_repository = goals_repository
        self._logger = logger or get_app_logger()

    def execute(self, goal_id: UUID) -> None:
        self._goals_repository.delete_goal(goal_id)
        self._logger.info(f"Deleted goal {goal_id}")


__all__ = [
    "SaveTransactionUseCase",
    "DeleteTransactionUseCase",
    "SaveRecurringBillUseCase",
    "DeleteRecurringBillUseCase",
    "SaveGoalUseCase",
    "DeleteGoalUseCase",
]
