"""Use cases for user categories."""

from dataclasses import dataclass
from uuid import UUID

from src.application.ports.ledger_repository import CategoriesRepositoryPort
from src.domain.constants import (
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
)
from src.domain.errors import ValidationError
from src.domain.models.ledger import Category, TransactionKind
from src.domain.services.validation import validate_category
from src.infrastructure.logging.logger import get_app_logger


def build_default_categories() -> list[Category]:
    """Return the built-in expense and income categories in display order."""
    categories = []
    for kind, defaults in (
        (TransactionKind.EXPENSE, DEFAULT_EXPENSE_CATEGORIES),
        (TransactionKind.INCOME, DEFAULT_INCOME_CATEGORIES),
    ):
        for order, (name, icon, color) in enumerate(defaults):
            categories.append(
                Category(
                    name=name,
                    kind=kind,
                    icon=icon,
                    color=color,
                    is_default=True,
                    sort_order=order,
                )
            )
    return categories


class SaveCategoryUseCase:
    """Validate and store a category.

    Names are trimmed and must be unique, ignoring case, among categories of
    the same kind. Editing a category keeps its own name available.
    """

    def __init__(
        self,
        categories_repository: CategoriesRepositoryPort,
        logger=None,
    ) -> None:
        self._categories_repository = categories_repository
        self._logger = logger or get_app_logger()

    def execute(self, category: Category) -> Category:
        """Store the category and return the normalized record.

        Raises:
            ValidationError: If the name is blank or already taken.
        """
        existing = self._categories_repository.fetch_categories(
            kind=category.kind
        )
        valid = validate_category(category, existing)
        self._categories_repository.save_category(valid)
        self._logger.info(
            f"Saved {valid.kind.value} category '{valid.name}'"
        )
        return valid


class DeleteCategoryUseCase:
    """Delete a user-created category.

    Records that already captured the category keep their snapshot.
    """

    def __init__(
        self,
        categories_repository: CategoriesRepositoryPort,
        logger=None,
    ) -> None:
        self._categories_repository = categories_repository
        self._logger = logger or get_app_logger()

    def execute(self, category: Category) -> None:
        """Delete the category.

        Raises:
            ValidationError: If the category is one of the defaults.
        """
        if category.is_default:
            raise ValidationError(
                "category",
                f"default category '{category.name}' cannot be deleted",
            )
        self._categories_repository.delete_category(category.id)
        self._logger.info(f"Deleted category '{category.name}'")


@dataclass(frozen=True)
class SeedCategoriesResult:
    """Result of seeding default categories.

    Attributes:
        seeded: Whether the defaults were written.
        created_count: Number of categories written.
    """

    seeded: bool
    created_count: int


class SeedDefaultCategoriesUseCase:
    """Write the default categories into an empty store."""

    def __init__(
        self,
        categories_repository: CategoriesRepositoryPort,
        logger=None,
    ) -> None:
        self._categories_repository = categories_repository
        self._logger = logger or get_app_logger()

    def run(self) -> SeedCategoriesResult:
        if self._categories_repository.fetch_categories():
            return SeedCategoriesResult(seeded=False, created_count=0)
        defaults = build_default_categories()
        for category in defaults:
            self._categories_repository.save_category(category)
        self._logger.info(f"Seeded {len(defaults)} default categories")
        return SeedCategoriesResult(seeded=True, created_count=len(defaults))


__all__ = [
    "build_default_categories",
    "SaveCategoryUseCase",
    "DeleteCategoryUseCase",
    "SeedCategoriesResult",
    "SeedDefaultCategoriesUseCase",
]
