"""Supabase repository for shopping list items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from biteqube.adapters.supabase_rows import parse_datetime
from biteqube.domain.shopping import ShoppingItem
from biteqube.services.shopping import SHOPPING_ITEMS_TABLE, ShoppingRepository


@dataclass
class SupabaseShoppingRepository(ShoppingRepository):
    """Supabase-backed shopping list."""

    client: Client

    def add_items(self, user_id: UUID, names: list[str]) -> list[ShoppingItem]:
        response = (
            self.client.table(SHOPPING_ITEMS_TABLE)
            .insert(
                [
                    {"user_id": str(user_id), "name": name, "is_checked": False}
                    for name in names
                ]
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to add shopping items")
        return [_parse_item(row) for row in response.data]

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        response = (
            self.client.table(SHOPPING_ITEMS_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, item_id: UUID) -> ShoppingItem | None:
        response = (
            self.client.table(SHOPPING_ITEMS_TABLE)
            .select("*")
            .eq("item_id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def set_checked(self, item_id: UUID, is_checked: bool) -> ShoppingItem:
        response = (
            self.client.table(SHOPPING_ITEMS_TABLE)
            .update({"is_checked": is_checked})
            .eq("item_id", str(item_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping item")
        return _parse_item(response.data[0])

    def delete_items(self, item_ids: list[UUID]) -> None:
        if not item_ids:
            return
        self.client.table(SHOPPING_ITEMS_TABLE).delete().in_(
            "item_id", [str(item_id) for item_id in item_ids]
        ).execute()

    def clear(self, user_id: UUID) -> list[ShoppingItem]:
        response = (
            self.client.table(SHOPPING_ITEMS_TABLE)
            .delete()
            .eq("user_id", str(user_id))
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]


def _parse_item(row: dict[str, object]) -> ShoppingItem:
    return ShoppingItem(
        item_id=UUID(str(row["item_id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        is_checked=bool(row.get("is_checked", False)),
        created_at=parse_datetime(row.get("created_at")),
    )
