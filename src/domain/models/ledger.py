"""Domain models for ledger entries: transactions, categories, bills, goals."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from src.domain.constants import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    MONTHS_PER_YEAR,
    WEEKS_PER_YEAR,
)


class TransactionKind(str, Enum):
    """Direction of a money movement."""

    EXPENSE = "expense"
    INCOME = "income"


class BillFrequency(str, Enum):
    """How often a recurring bill is charged."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class GoalPeriod(str, Enum):
    """Repeating window a goal's spending limit applies to."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class CategorySnapshot:
    """Display fields of a category copied onto a record at save time.

    Later renames or deletions of the category do not alter records that
    already hold a snapshot.
    """

    name: str
    icon: str = DEFAULT_CATEGORY_ICON
    color: str = DEFAULT_CATEGORY_COLOR


@dataclass(frozen=True)
class Category:
    """User-defined spending or income category."""

    name: str
    kind: TransactionKind = TransactionKind.EXPENSE
    icon: str = DEFAULT_CATEGORY_ICON
    color: str = DEFAULT_CATEGORY_COLOR
    is_default: bool = False
    sort_order: int = 0
    id: UUID = field(default_factory=uuid4)

    def snapshot(self) -> CategorySnapshot:
        """Return the denormalized display fields of this category."""
        return CategorySnapshot(name=self.name, icon=self.icon, color=self.color)


@dataclass(frozen=True)
class Transaction:
    """A single money movement logged by the user.

    Attributes:
        title: Short description.
        amount: Positive amount in spending currency.
        kind: Expense or income.
        date: Timezone-aware instant of the movement.
        category: Category display fields captured at creation.
        note: Free-form note.
        recurring_bill_id: Bill that generated the transaction, if any.
    """

    title: str
    amount: Decimal
    kind: TransactionKind
    date: datetime
    category: CategorySnapshot
    note: str = ""
    recurring_bill_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def category_name(self) -> str:
        return self.category.name

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE


@dataclass(frozen=True)
class RecurringBill:
    """A fixed, predictable recurring expense used for planning only."""

    name: str
    amount: Decimal
    frequency: BillFrequency
    category: CategorySnapshot
    start_date: datetime | None = None
    is_active: bool = True
    notes: str = ""
    id: UUID = field(default_factory=uuid4)

    @property
    def monthly_equivalent(self) -> Decimal:
        """Amount normalized to one month."""
        if self.frequency is BillFrequency.WEEKLY:
            return self.amount * WEEKS_PER_YEAR / MONTHS_PER_YEAR
        if self.frequency is BillFrequency.YEARLY:
            return self.amount / MONTHS_PER_YEAR
        return self.amount


@dataclass(frozen=True)
class Goal:
    """A spending ceiling for one category over a repeating period."""

    category_name: str
    spending_limit: Decimal
    period: GoalPeriod = GoalPeriod.MONTHLY
    notes: str = ""
    created_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)


__all__ = [
    "TransactionKind",
    "BillFrequency",
    "GoalPeriod",
    "CategorySnapshot",
    "Category",
    "Transaction",
    "RecurringBill",
    "Goal",
]
