"""
services/category_registry.py
-----------------------------
In-memory CRUD over the user's budget categories.
"""

import uuid
from dataclasses import replace
from typing import Iterable, Iterator, Optional

from models.budget import BudgetCategory
from utils.errors import InvalidInputError
from utils.logger import get_logger

logger = get_logger(__name__)

# Fields a caller may change through update(); id and spent are owned by
# the registry and the deriver respectively.
EDITABLE_FIELDS = ("name", "limit", "color", "icon")


def new_id() -> str:
    return uuid.uuid4().hex[:8]


class CategoryRegistry:
    """
    Ordered collection of BudgetCategory records.

    Names are meant to be unique but this is not enforced. Removing or
    renaming a category never touches transactions that reference it.
    """

    def __init__(self, categories: Iterable[BudgetCategory] = ()):
        self._categories: list[BudgetCategory] = list(categories)

    def add(self, name: str, limit: float, color: str = "#6B7280",
            icon: str = "MoreHorizontal") -> BudgetCategory:
        """Append a new category with a fresh id and zero spend."""
        existing = {c.id for c in self._categories}
        category_id = new_id()
        while category_id in existing:
            category_id = new_id()

        category = BudgetCategory(
            id=category_id, name=name, limit=limit, spent=0.0, color=color, icon=icon,
        )
        self._categories.append(category)
        logger.info(f"Added category #{category.id} '{name}' (limit {limit})")
        return category

    def update(self, category_id: str, **fields) -> Optional[BudgetCategory]:
        """
        Merge ``fields`` into the category with this id.

        Returns:
            The updated category, or None when the id is unknown.

        Raises:
            InvalidInputError: If a field name is not editable.
        """
        unknown = [k for k in fields if k not in EDITABLE_FIELDS and k not in ("id", "spent")]
        if unknown:
            raise InvalidInputError("fields", unknown, "not a category field")
        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}

        for index, category in enumerate(self._categories):
            if category.id == category_id:
                updated = replace(category, **changes)
                self._categories[index] = updated
                logger.info(f"Updated category #{category_id}: {sorted(changes)}")
                return updated
        return None

    def delete(self, category_id: str) -> bool:
        """Remove the category; unknown ids are a no-op."""
        before = len(self._categories)
        self._categories = [c for c in self._categories if c.id != category_id]
        deleted = len(self._categories) != before
        if deleted:
            logger.info(f"Deleted category #{category_id}")
        return deleted

    def get(self, category_id: str) -> Optional[BudgetCategory]:
        return next((c for c in self._categories if c.id == category_id), None)

    def find_by_name(self, name: str) -> Optional[BudgetCategory]:
        """First category whose name matches exactly."""
        return next((c for c in self._categories if c.name == name), None)

    def snapshot(self) -> tuple[BudgetCategory, ...]:
        return tuple(self._categories)

    def __iter__(self) -> Iterator[BudgetCategory]:
        return iter(tuple(self._categories))

    def __len__(self) -> int:
        return len(self._categories)
