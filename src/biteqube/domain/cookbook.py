"""Saved recipe models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SavedRecipe:
    """A copy of a catalog meal saved to a user's cookbook."""

    id: UUID
    user_id: UUID
    recipe_id: str
    recipe_name: str
    image_url: str | None
    data: dict[str, object]
    created_at: datetime | None
