"""Supabase repository for the imported recipes table."""

import re
from dataclasses import dataclass

from supabase import Client

from biteqube.adapters.supabase_rows import optional_int
from biteqube.domain.recipes import DatabaseRecipe
from biteqube.services.recipes import RecipeRepository

# PostgREST uses these characters as filter syntax inside or=(...).
_FILTER_SYNTAX = re.compile(r"[,()]")


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe catalog."""

    client: Client

    def search_recipes(self, term: str, limit: int) -> list[DatabaseRecipe]:
        """Substring match over name, cuisine, category and ingredients."""
        pattern = f"%{_FILTER_SYNTAX.sub(' ', term)}%"
        response = (
            self.client.table("recipes")
            .select("*")
            .or_(
                f"recipe_name.ilike.{pattern},cuisine.ilike.{pattern},"
                f"category.ilike.{pattern},ingredients.ilike.{pattern}"
            )
            .limit(limit)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: int) -> DatabaseRecipe | None:
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_by_cuisine(self, cuisine: str, limit: int) -> list[DatabaseRecipe]:
        response = (
            self.client.table("recipes")
            .select("*")
            .ilike("cuisine", f"%{cuisine}%")
            .limit(limit)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def list_random(self, limit: int) -> list[DatabaseRecipe]:
        """Return the newest recipes; PostgREST has no random ordering."""
        response = (
            self.client.table("recipes")
            .select("*")
            .order("id", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def list_cuisines(self) -> list[str]:
        response = (
            self.client.table("recipes")
            .select("cuisine")
            .not_.is_("cuisine", "null")
            .execute()
        )
        return sorted({str(row["cuisine"]) for row in response.data or []})

    def insert_recipes(self, rows: list[dict[str, object]]) -> int:
        if not rows:
            return 0
        response = self.client.table("recipes").insert(rows).execute()
        if not response.data:
            raise RuntimeError("Failed to insert recipes")
        return len(response.data)


def _parse_recipe(row: dict[str, object]) -> DatabaseRecipe:
    return DatabaseRecipe(
        id=int(row["id"]),
        recipe_name=str(row.get("recipe_name") or ""),
        ingredients=str(row.get("ingredients") or ""),
        instructions=str(row.get("instructions") or ""),
        cuisine=row.get("cuisine"),
        category=row.get("category"),
        total_time_mins=optional_int(row.get("total_time_mins")),
        ingredient_count=optional_int(row.get("ingredient_count")),
        image_url=row.get("image_url"),
        source_url=row.get("source_url"),
    )
