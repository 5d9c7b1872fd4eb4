"""Ports for reading and writing ledger records."""

from typing import Protocol
from uuid import UUID

from src.domain.models.ledger import (
    Category,
    Goal,
    RecurringBill,
    Transaction,
    TransactionKind,
)


class TransactionsRepositoryPort(Protocol):
    """Port exposing transactions."""

    def fetch_transactions(self) -> list[Transaction]:
        """Return all transactions, newest first."""

    def save_transaction(self, transaction: Transaction) -> None:
        """Insert the transaction or update it in place by id."""

    def delete_transaction(self, transaction_id: UUID) -> None:
        """Delete the transaction with the given id."""


class CategoriesRepositoryPort(Protocol):
    """Port exposing user categories."""

    def fetch_categories(
        self,
        kind: TransactionKind | None = None,
    ) -> list[Category]:
        """Return categories ordered by sort order, optionally by kind."""

    def save_category(self, category: Category) -> None:
        """Insert the category or update it in place by id."""

    def delete_category(self, category_id: UUID) -> None:
        """Delete the category with the given id."""


class RecurringBillsRepositoryPort(Protocol):
    """Port exposing recurring bills."""

    def fetch_recurring_bills(
        self,
        active_only: bool = False,
    ) -> list[RecurringBill]:
        """Return recurring bills, optionally only active ones."""

    def save_recurring_bill(self, bill: RecurringBill) -> None:
        """Insert the bill or update it in place by id."""

    def delete_recurring_bill(self, bill_id: UUID) -> None:
        """Delete the bill with the given id."""


class GoalsRepositoryPort(Protocol):
    """Port exposing spending goals."""

    def fetch_goals(self) -> list[Goal]:
        """Return all goals."""

    def save_goal(self, goal: Goal) -> None:
        """Insert the goal or update it in place by id."""

    def delete_goal(self, goal_id: UUID) -> None:
        """Delete the goal with the given id."""


__all__ = [
    "TransactionsRepositoryPort",
    "CategoriesRepositoryPort",
    "RecurringBillsRepositoryPort",
    "GoalsRepositoryPort",
]
