"""Shopping list service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.errors import NotFoundError, ValidationError
from biteqube.domain.realtime import DELETE, INSERT, UPDATE, ChangeEvent
from biteqube.domain.recipes import Ingredient
from biteqube.domain.shopping import ShoppingItem
from biteqube.services.nutrition import shopping_line
from biteqube.services.realtime import ChangePublisher

SHOPPING_ITEMS_TABLE = "shopping_items"


class ShoppingRepository(Protocol):
    """Persistence interface for shopping list items."""

    def add_items(self, user_id: UUID, names: list[str]) -> list[ShoppingItem]:
        """Insert unchecked items and return them."""

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        """Return items, newest first."""

    def get_item(self, item_id: UUID) -> ShoppingItem | None:
        """Return an item by id, if present."""

    def set_checked(self, item_id: UUID, is_checked: bool) -> ShoppingItem:
        """Update the checked flag and return the item."""

    def delete_items(self, item_ids: list[UUID]) -> None:
        """Delete the given items."""

    def clear(self, user_id: UUID) -> list[ShoppingItem]:
        """Delete every item for the user and return the removed rows."""


@dataclass(frozen=True)
class ClearResult:
    removed: int
    message: str


@dataclass
class ShoppingService:
    """Application service for the shopping list; every mutation is published."""

    repository: ShoppingRepository
    publisher: ChangePublisher

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        return self.repository.list_items(user_id)

    def add_items(self, user_id: UUID, names: list[str]) -> list[ShoppingItem]:
        """Add trimmed, non-blank names as unchecked items."""
        cleaned = [name.strip() for name in names if name.strip()]
        if not cleaned:
            raise ValidationError("Please enter an item name")
        items = self.repository.add_items(user_id, cleaned)
        for item in items:
            self._publish(user_id, INSERT, new=item)
        return items

    def add_ingredients(
        self, user_id: UUID, ingredients: list[Ingredient]
    ) -> list[ShoppingItem]:
        """Add a recipe's ingredients as "<measure> <name>" entries."""
        return self.add_items(user_id, [shopping_line(item) for item in ingredients])

    def toggle(self, user_id: UUID, item_id: UUID) -> ShoppingItem:
        item = self._owned_item(user_id, item_id)
        updated = self.repository.set_checked(item_id, not item.is_checked)
        self._publish(user_id, UPDATE, new=updated, old=item)
        return updated

    def set_checked(
        self, user_id: UUID, item_id: UUID, is_checked: bool
    ) -> ShoppingItem:
        item = self._owned_item(user_id, item_id)
        updated = self.repository.set_checked(item_id, is_checked)
        self._publish(user_id, UPDATE, new=updated, old=item)
        return updated

    def delete(self, user_id: UUID, item_id: UUID) -> None:
        item = self._owned_item(user_id, item_id)
        self.repository.delete_items([item_id])
        self._publish(user_id, DELETE, old=item)

    def clear(self, user_id: UUID) -> ClearResult:
        removed = self.repository.clear(user_id)
        if not removed:
            return ClearResult(removed=0, message="Shopping list is already empty")
        for item in removed:
            self._publish(user_id, DELETE, old=item)
        return ClearResult(removed=len(removed), message="Shopping list cleared")

    def clear_completed(self, user_id: UUID) -> ClearResult:
        """Remove checked items; an informational result when there are none."""
        completed = [item for item in self.list_items(user_id) if item.is_checked]
        if not completed:
            return ClearResult(removed=0, message="No completed items to clear")
        self.repository.delete_items([item.item_id for item in completed])
        for item in completed:
            self._publish(user_id, DELETE, old=item)
        return ClearResult(
            removed=len(completed),
            message=f"Cleared {len(completed)} completed items",
        )

    def _owned_item(self, user_id: UUID, item_id: UUID) -> ShoppingItem:
        item = self.repository.get_item(item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError("Shopping item", str(item_id))
        return item

    def _publish(
        self,
        user_id: UUID,
        event_type: str,
        new: ShoppingItem | None = None,
        old: ShoppingItem | None = None,
    ) -> None:
        self.publisher.publish(
            user_id,
            ChangeEvent(
                table=SHOPPING_ITEMS_TABLE,
                event_type=event_type,
                new=item_row(new) if new else {},
                old=item_row(old) if old else {},
            ),
        )


def item_row(item: ShoppingItem) -> dict[str, object]:
    return {
        "item_id": str(item.item_id),
        "user_id": str(item.user_id),
        "name": item.name,
        "is_checked": item.is_checked,
        "created_at": item.created_at.isoformat() if item.created_at else None,
    }
