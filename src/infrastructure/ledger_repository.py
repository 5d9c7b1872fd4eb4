"""SQLAlchemy-backed repositories for ledger records."""

from uuid import UUID

from sqlalchemy import text

from src.application.ports.ledger_repository import (
    CategoriesRepositoryPort,
    GoalsRepositoryPort,
    RecurringBillsRepositoryPort,
    TransactionsRepositoryPort,
)
from src.domain.models.ledger import (
    BillFrequency,
    Category,
    CategorySnapshot,
    Goal,
    GoalPeriod,
    RecurringBill,
    Transaction,
    TransactionKind,
)
from src.infrastructure.sql_support import (
    SqlAlchemyRepository,
    from_iso,
    to_iso,
)
from src.utils.decimal_utils import coerce_decimal, decimal_to_text


SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, title, amount, kind, date, note, category_name,
           category_icon, category_color, recurring_bill_id
    FROM transactions
    """
)

UPSERT_TRANSACTION_SQL = text(
    """
    INSERT OR REPLACE INTO transactions (
        id, title, amount, kind, date, note, category_name,
        category_icon, category_color, recurring_bill_id
    )
    VALUES (
        :id, :title, :amount, :kind, :date, :note, :category_name,
        :category_icon, :category_color, :recurring_bill_id
    )
    """
)

DELETE_TRANSACTION_SQL = text("DELETE FROM transactions WHERE id = :id")

SELECT_CATEGORIES_SQL = text(
    """
    SELECT id, name, kind, icon, color, is_default, sort_order
    FROM categories
    ORDER BY kind, sort_order, name
    """
)

UPSERT_CATEGORY_SQL = text(
    """
    INSERT OR REPLACE INTO categories (
        id, name, kind, icon, color, is_default, sort_order
    )
    VALUES (:id, :name, :kind, :icon, :color, :is_default, :sort_order)
    """
)

DELETE_CATEGORY_SQL = text("DELETE FROM categories WHERE id = :id")

SELECT_BILLS_SQL = text(
    """
    SELECT id, name, amount, frequency, category_name, category_icon,
           category_color, start_date, is_active, notes
    FROM recurring_bills
    ORDER BY name
    """
)

UPSERT_BILL_SQL = text(
    """
    INSERT OR REPLACE INTO recurring_bills (
        id, name, amount, frequency, category_name, category_icon,
        category_color, start_date, is_active, notes
    )
    VALUES (
        :id, :name, :amount, :frequency, :category_name, :category_icon,
        :category_color, :start_date, :is_active, :notes
    )
    """
)

DELETE_BILL_SQL = text("DELETE FROM recurring_bills WHERE id = :id")

SELECT_GOALS_SQL = text(
    """
    SELECT id, category_name, spending_limit, period, notes, created_at
    FROM goals
    ORDER BY category_name
    """
)

UPSERT_GOAL_SQL = text(
    """
    INSERT OR REPLACE INTO goals (
        id, category_name, spending_limit, period, notes, created_at
    )
    VALUES (
        :id, :category_name, :spending_limit, :period, :notes, :created_at
    )
    """
)

DELETE_GOAL_SQL = text("DELETE FROM goals WHERE id = :id")


def _category_snapshot(row) -> CategorySnapshot:
    return CategorySnapshot(
        name=row.category_name,
        icon=row.category_icon,
        color=row.category_color,
    )


class SqlAlchemyTransactionsRepository(
    SqlAlchemyRepository,
    TransactionsRepositoryPort,
):
    """Repository backed by SQLAlchemy for transactions."""

    def fetch_transactions(self) -> list[Transaction]:
        """Return all transactions, newest first."""
        rows = self._fetch_all(SELECT_TRANSACTIONS_SQL)
        transactions = [
            Transaction(
                id=UUID(row.id),
                title=row.title,
                amount=coerce_decimal(row.amount),
                kind=TransactionKind(row.kind),
                date=from_iso(row.date),
                category=_category_snapshot(row),
                note=row.note or "",
                recurring_bill_id=(
                    UUID(row.recurring_bill_id)
                    if row.recurring_bill_id
                    else None
                ),
            )
            for row in rows
        ]
        # Offsets may differ between rows, so order on parsed instants.
        return sorted(transactions, key=lambda t: t.date, reverse=True)

    def save_transaction(self, transaction: Transaction) -> None:
        self._execute(
            UPSERT_TRANSACTION_SQL,
            {
                "id": str(transaction.id),
                "title": transaction.title,
                "amount": decimal_to_text(transaction.amount),
                "kind": transaction.kind.value,
                "date": to_iso(transaction.date),
                "note": transaction.note,
                "category_name": transaction.category.name,
                "category_icon": transaction.category.icon,
                "category_color": transaction.category.color,
                "recurring_bill_id": (
                    str(transaction.recurring_bill_id)
                    if transaction.recurring_bill_id
                    else None
                ),
            },
        )

    def delete_transaction(self, transaction_id: UUID) -> None:
        self._execute(DELETE_TRANSACTION_SQL, {"id": str(transaction_id)})


class SqlAlchemyCategoriesRepository(
    SqlAlchemyRepository,
    CategoriesRepositoryPort,
):
    """Repository backed by SQLAlchemy for categories."""

    def fetch_categories(
        self,
        kind: TransactionKind | None = None,
    ) -> list[Category]:
        """Return categories ordered by sort order, optionally by kind."""
        categories = [
            Category(
                id=UUID(row.id),
                name=row.name,
                kind=TransactionKind(row.kind),
                icon=row.icon,
                color=row.color,
                is_default=bool(row.is_default),
                sort_order=row.sort_order,
            )
            for row in self._fetch_all(SELECT_CATEGORIES_SQL)
        ]
        if kind is None:
            return categories
        return [category for category in categories if category.kind is kind]

    def save_category(self, category: Category) -> None:
        self._execute(
            UPSERT_CATEGORY_SQL,
            {
                "id": str(category.id),
                "name": category.name,
                "kind": category.kind.value,
                "icon": category.icon,
                "color": category.color,
                "is_default": int(category.is_default),
                "sort_order": category.sort_order,
            },
        )

    def delete_category(self, category_id: UUID) -> None:
        self._execute(DELETE_CATEGORY_SQL, {"id": str(category_id)})


class SqlAlchemyRecurringBillsRepository(
    SqlAlchemyRepository,
    RecurringBillsRepositoryPort,
):
    """Repository backed by SQLAlchemy for recurring bills."""

    def fetch_recurring_bills(
        self,
        active_only: bool = False,
    ) -> list[RecurringBill]:
        """Return recurring bills, optionally only active ones."""
        bills = [
            RecurringBill(
                id=UUID(row.id),
                name=row.name,
                amount=coerce_decimal(row.amount),
                frequency=BillFrequency(row.frequency),
                category=_category_snapshot(row),
                start_date=from_iso(row.start_date),
                is_active=bool(row.is_active),
                notes=row.notes or "",
            )
            for row in self._fetch_all(SELECT_BILLS_SQL)
        ]
        if active_only:
            return [bill for bill in bills if bill.is_active]
        return bills

    def save_recurring_bill(self, bill: RecurringBill) -> None:
        self._execute(
            UPSERT_BILL_SQL,
            {
                "id": str(bill.id),
                "name": bill.name,
                "amount": decimal_to_text(bill.amount),
                "frequency": bill.frequency.value,
                "category_name": bill.category.name,
                "category_icon": bill.category.icon,
                "category_color": bill.category.color,
                "start_date": to_iso(bill.start_date),
                "is_active": int(bill.is_active),
                "notes": bill.notes,
            },
        )

    def delete_recurring_bill(self, bill_id: UUID) -> None:
        self._execute(DELETE_BILL_SQL, {"id": str(bill_id)})


class SqlAlchemyGoalsRepository(SqlAlchemyRepository, GoalsRepositoryPort):
    """Repository backed by SQLAlchemy for goals."""

    def fetch_goals(self) -> list[Goal]:
        return [
            Goal(
                id=UUID(row.id),
                category_name=row.category_name,
                spending_limit=coerce_decimal(row.spending_limit),
                period=GoalPeriod(row.period),
                notes=row.notes or "",
                created_at=from_iso(row.created_at),
            )
            for row in self._fetch_all(SELECT_GOALS_SQL)
        ]

    def save_goal(self, goal: Goal) -> None:
        self._execute(
            UPSERT_GOAL_SQL,
            {
                "id": str(goal.id),
                "category_name": goal.category_name,
                "spending_limit": decimal_to_text(goal.spending_limit),
                "period": goal.period.value,
                "notes": goal.notes,
                "created_at": to_iso(goal.created_at),
            },
        )

    def delete_goal(self, goal_id: UUID) -> None:
        self._execute(DELETE_GOAL_SQL, {"id": str(goal_id)})


__all__ = [
    "SqlAlchemyTransactionsRepository",
    "SqlAlchemyCategoriesRepository",
    "SqlAlchemyRecurringBillsRepository",
    "SqlAlchemyGoalsRepository",
]
