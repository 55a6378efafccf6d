"""Supabase repository for cookbook entries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from biteqube.adapters.supabase_rows import parse_datetime
from biteqube.domain.cookbook import SavedRecipe
from biteqube.services.cookbook import SAVED_RECIPES_TABLE, SavedRecipeRepository


@dataclass
class SupabaseSavedRecipeRepository(SavedRecipeRepository):
    """Supabase-backed saved recipes."""

    client: Client

    def save_recipe(self, user_id: UUID, meal: dict[str, object]) -> SavedRecipe:
        """Store the full meal payload next to its id, name and thumbnail."""
        response = (
            self.client.table(SAVED_RECIPES_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "recipe_id": str(meal.get("idMeal", "")),
                    "recipe_name": meal.get("strMeal"),
                    "image_url": meal.get("strMealThumb"),
                    "data": meal,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_saved(response.data[0])

    def list_saved(self, user_id: UUID) -> list[SavedRecipe]:
        response = (
            self.client.table(SAVED_RECIPES_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_saved(row) for row in response.data or []]

    def remove_recipe(self, user_id: UUID, recipe_id: str) -> list[SavedRecipe]:
        response = (
            self.client.table(SAVED_RECIPES_TABLE)
            .delete()
            .eq("user_id", str(user_id))
            .eq("recipe_id", recipe_id)
            .execute()
        )
        return [_parse_saved(row) for row in response.data or []]


def _parse_saved(row: dict[str, object]) -> SavedRecipe:
    data = row.get("data")
    return SavedRecipe(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        recipe_id=str(row.get("recipe_id", "")),
        recipe_name=str(row.get("recipe_name") or ""),
        image_url=row.get("image_url"),
        data=data if isinstance(data, dict) else {},
        created_at=parse_datetime(row.get("created_at")),
    )
