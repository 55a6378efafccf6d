"""Shopping list models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ShoppingItem:
    item_id: UUID
    user_id: UUID
    name: str
    is_checked: bool
    created_at: datetime | None
