"""Policy for category name uniqueness."""

from collections.abc import Iterable

from src.domain.models.ledger import Category, TransactionKind


def is_duplicate_category_name(
    name: str,
    kind: TransactionKind,
    existing: Iterable[Category],
    exclude_id=None,
) -> bool:
    """Return True when another category of the same kind has this name.

    Comparison is case-insensitive and ignores surrounding whitespace.

    Args:
        name: Candidate name.
        kind: Kind of the candidate category.
        existing: Categories already stored.
        exclude_id: Id of the category being edited, if any.

    Returns:
        bool: True when the name is already taken within the kind.
    """
    candidate = name.strip().lower()
    for category in existing:
        if exclude_id is not None and category.id == exclude_id:
            continue
        if category.kind is not kind:
            continue
        if category.name.strip().lower() == candidate:
            return True
    return False


__all__ = ["is_duplicate_category_name"]
