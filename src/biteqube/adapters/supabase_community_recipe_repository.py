"""Supabase repository for user-authored recipes."""

import re
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from biteqube.adapters.supabase_rows import optional_int, parse_datetime
from biteqube.domain.recipes import CommunityRecipe, RecipeAuthor
from biteqube.services.recipes import CommunityRecipeRepository

_FILTER_SYNTAX = re.compile(r"[,()]")


@dataclass
class SupabaseCommunityRecipeRepository(CommunityRecipeRepository):
    """Supabase-backed community recipes with authors joined from users."""

    client: Client

    def create_recipe(
        self, user_id: UUID, payload: dict[str, object]
    ) -> CommunityRecipe:
        response = (
            self.client.table("user_recipes")
            .insert({**payload, "user_id": str(user_id), "is_public": True})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def list_public(self) -> list[CommunityRecipe]:
        response = (
            self.client.table("user_recipes")
            .select("*")
            .eq("is_public", True)
            .order("created_at", desc=True)
            .execute()
        )
        return self._with_authors(response.data or [])

    def get_recipe(self, recipe_id: UUID) -> CommunityRecipe | None:
        response = (
            self.client.table("user_recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._with_authors(response.data)[0]

    def list_for_user(self, user_id: UUID) -> list[CommunityRecipe]:
        response = (
            self.client.table("user_recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def update_recipe(
        self, recipe_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> CommunityRecipe | None:
        """Update only when the recipe belongs to the user."""
        response = (
            self.client.table("user_recipes")
            .update(payload)
            .eq("id", str(recipe_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def delete_recipe(self, recipe_id: UUID, user_id: UUID) -> bool:
        response = (
            self.client.table("user_recipes")
            .delete()
            .eq("id", str(recipe_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def search_public(self, term: str, limit: int) -> list[CommunityRecipe]:
        pattern = f"%{_FILTER_SYNTAX.sub(' ', term)}%"
        response = (
            self.client.table("user_recipes")
            .select("*")
            .eq("is_public", True)
            .or_(
                f"title.ilike.{pattern},description.ilike.{pattern},"
                f"category.ilike.{pattern},cuisine.ilike.{pattern}"
            )
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return self._with_authors(response.data or [])

    def _with_authors(self, rows: list[dict[str, object]]) -> list[CommunityRecipe]:
        user_ids = sorted({str(row["user_id"]) for row in rows})
        authors: dict[str, RecipeAuthor] = {}
        if user_ids:
            response = (
                self.client.table("users")
                .select("id, email, name")
                .in_("id", user_ids)
                .execute()
            )
            authors = {
                str(user["id"]): RecipeAuthor(
                    id=UUID(str(user["id"])),
                    email=user.get("email"),
                    name=user.get("name"),
                )
                for user in response.data or []
            }
        return [
            _parse_recipe(row, authors.get(str(row["user_id"]))) for row in rows
        ]


def _parse_recipe(
    row: dict[str, object], author: RecipeAuthor | None = None
) -> CommunityRecipe:
    return CommunityRecipe(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        ingredients=_string_list(row.get("ingredients")),
        instructions=_string_list(row.get("instructions")),
        prep_time=optional_int(row.get("prep_time")),
        cook_time=optional_int(row.get("cook_time")),
        servings=optional_int(row.get("servings")),
        category=row.get("category"),
        cuisine=row.get("cuisine"),
        difficulty=row.get("difficulty"),
        image_url=row.get("image_url"),
        is_public=bool(row.get("is_public", True)),
        created_at=parse_datetime(row.get("created_at")),
        author=author,
    )


def _string_list(value: object) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    return []
