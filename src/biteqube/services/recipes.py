"""Recipe catalog access, community recipes and combined search."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.errors import (
    BiteQubeError,
    NotFoundError,
    PayloadTooLargeError,
    PermissionDeniedError,
    ValidationError,
)
from biteqube.domain.recipes import (
    CommunityRecipe,
    CommunityRecipeDraft,
    DatabaseRecipe,
    Ingredient,
    RecipeCard,
    RecipeDetails,
    SearchResult,
)
from biteqube.services.nutrition import estimate_nutrition, extract_ingredients

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024
PLACEHOLDER_IMAGE = "/api/placeholder/400/300"
DATABASE_ID_PREFIX = "db-"

SOURCE_DATABASE = "database"
SOURCE_COMMUNITY = "community"
SOURCE_MEALDB = "mealdb"
SOURCE_SAVED = "saved"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<data>.*)$", re.DOTALL)


class MealDbClient(Protocol):
    """Interface for the public TheMealDB API."""

    async def search_by_name(self, name: str) -> list[dict[str, object]]:
        """Return meals whose name matches."""

    async def random_meal(self) -> dict[str, object] | None:
        """Return a single random meal."""

    async def get_meal(self, meal_id: str) -> dict[str, object] | None:
        """Return a meal by id, if present."""

    async def filter_by_category(self, category: str) -> list[dict[str, object]]:
        """Return meal summaries in a category."""


class RecipeRepository(Protocol):
    """Persistence interface for the imported recipe table."""

    def search_recipes(self, term: str, limit: int) -> list[DatabaseRecipe]:
        """Substring match over name, cuisine, category and ingredients."""

    def get_recipe(self, recipe_id: int) -> DatabaseRecipe | None:
        """Return a recipe by id, if present."""

    def list_by_cuisine(self, cuisine: str, limit: int) -> list[DatabaseRecipe]:
        """Return recipes whose cuisine matches."""

    def list_random(self, limit: int) -> list[DatabaseRecipe]:
        """Return a selection of recipes for suggestions."""

    def list_cuisines(self) -> list[str]:
        """Return distinct cuisines, sorted."""

    def insert_recipes(self, rows: list[dict[str, object]]) -> int:
        """Insert rows and return how many were stored."""


class CommunityRecipeRepository(Protocol):
    """Persistence interface for user-authored recipes."""

    def create_recipe(
        self, user_id: UUID, payload: dict[str, object]
    ) -> CommunityRecipe:
        """Create a public recipe and return it."""

    def list_public(self) -> list[CommunityRecipe]:
        """Return public recipes, newest first, with authors."""

    def get_recipe(self, recipe_id: UUID) -> CommunityRecipe | None:
        """Return a recipe with its author, if present."""

    def list_for_user(self, user_id: UUID) -> list[CommunityRecipe]:
        """Return recipes authored by a user, newest first."""

    def update_recipe(
        self, recipe_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> CommunityRecipe | None:
        """Update a recipe owned by the user."""

    def delete_recipe(self, recipe_id: UUID, user_id: UUID) -> bool:
        """Delete a recipe owned by the user; return whether a row was removed."""

    def search_public(self, term: str, limit: int) -> list[CommunityRecipe]:
        """Substring match over title, description, category and cuisine."""


@dataclass
class RecipeService:
    """Application service for recipe lookups across all sources."""

    mealdb: MealDbClient
    recipes: RecipeRepository
    community: CommunityRecipeRepository

    def search_all(self, query: str, limit: int = 50) -> SearchResult:
        """Search the recipe table and community recipes, title matches first."""
        term = query.strip().lower()
        database = self._search_database(term, limit)
        community = self._search_community(term, limit // 2)
        cards = [card_from_database(recipe) for recipe in database]
        cards.extend(card_from_community(recipe) for recipe in community)
        cards.sort(key=lambda card: term not in card.name.lower())
        logger.debug(
            "Combined recipe search",
            extra={
                "term": term,
                "database": len(database),
                "community": len(community),
            },
        )
        return SearchResult(
            cards=cards[:limit],
            database_count=len(database),
            community_count=len(community),
        )

    async def meals_by_name(self, name: str) -> list[dict[str, object]]:
        """Search TheMealDB, returning an empty list when the call fails."""
        try:
            return await self.mealdb.search_by_name(name)
        except Exception:
            logger.exception("TheMealDB search failed", extra={"meal_name": name})
            return []

    async def random_meals(self, count: int = 6) -> list[dict[str, object]]:
        """Fetch random meals one at a time; any failure yields an empty list."""
        meals: list[dict[str, object]] = []
        try:
            for _ in range(count):
                meal = await self.mealdb.random_meal()
                if meal:
                    meals.append(meal)
        except Exception:
            logger.exception("TheMealDB random fetch failed")
            return []
        return meals

    async def meals_by_category(self, category: str) -> list[dict[str, object]]:
        try:
            return await self.mealdb.filter_by_category(category)
        except Exception:
            logger.exception("TheMealDB category filter failed")
            return []

    async def get_meal(self, meal_id: str) -> dict[str, object] | None:
        try:
            return await self.mealdb.get_meal(meal_id)
        except Exception:
            logger.exception("TheMealDB lookup failed", extra={"meal_id": meal_id})
            return None

    def random_recipes(self, limit: int = 12) -> list[DatabaseRecipe]:
        try:
            return self.recipes.list_random(limit)
        except Exception:
            logger.exception("Random recipe query failed")
            return []

    def recipes_by_cuisine(self, cuisine: str, limit: int = 20) -> list[DatabaseRecipe]:
        return self.recipes.list_by_cuisine(cuisine, limit)

    def cuisines(self) -> list[str]:
        return self.recipes.list_cuisines()

    async def get_details(self, recipe_id: str) -> RecipeDetails:
        """Resolve a recipe id from any source into a full recipe view."""
        community_id = _parse_uuid(recipe_id)
        if community_id is not None:
            recipe = self.community.get_recipe(community_id)
            if recipe is None:
                raise NotFoundError("Recipe", recipe_id)
            return _details_from_community(recipe)
        if recipe_id.startswith(DATABASE_ID_PREFIX):
            database_id = parse_int(recipe_id.removeprefix(DATABASE_ID_PREFIX))
            database_recipe = (
                self.recipes.get_recipe(database_id) if database_id else None
            )
            if database_recipe is None:
                raise NotFoundError("Recipe", recipe_id)
            return _details_from_database(database_recipe)
        meal = await self.get_meal(recipe_id)
        if not meal:
            raise NotFoundError("Recipe", recipe_id)
        return _details_from_meal(meal)

    def create_community_recipe(
        self, user_id: UUID, draft: CommunityRecipeDraft
    ) -> CommunityRecipe:
        """Validate and clean a draft, then store it as a public recipe."""
        return self.community.create_recipe(user_id, clean_draft(draft))

    def list_community_recipes(self) -> list[CommunityRecipe]:
        try:
            return self.community.list_public()
        except Exception:
            logger.exception("Failed to load community recipes")
            return []

    def list_own_recipes(self, user_id: UUID) -> list[CommunityRecipe]:
        return self.community.list_for_user(user_id)

    def update_community_recipe(
        self, recipe_id: UUID, user_id: UUID, updates: dict[str, object]
    ) -> CommunityRecipe:
        """Apply updates to a recipe the user owns."""
        updated = self.community.update_recipe(recipe_id, user_id, updates)
        if updated is None:
            raise self._ownership_error(recipe_id, "edit")
        return updated

    def delete_community_recipe(self, recipe_id: UUID, user_id: UUID) -> None:
        if not self.community.delete_recipe(recipe_id, user_id):
            raise self._ownership_error(recipe_id, "delete")

    def _ownership_error(self, recipe_id: UUID, action: str) -> BiteQubeError:
        """Distinguish a missing recipe from one owned by someone else."""
        if self.community.get_recipe(recipe_id) is None:
            return NotFoundError("Recipe", str(recipe_id))
        return PermissionDeniedError(f"You can only {action} your own recipes")

    def _search_database(self, term: str, limit: int) -> list[DatabaseRecipe]:
        try:
            return self.recipes.search_recipes(term, limit)
        except Exception:
            logger.exception("Recipe table search failed", extra={"term": term})
            return []

    def _search_community(self, term: str, limit: int) -> list[CommunityRecipe]:
        try:
            return self.community.search_public(term, limit)
        except Exception:
            logger.exception("Community recipe search failed", extra={"term": term})
            return []


def clean_draft(draft: CommunityRecipeDraft) -> dict[str, object]:
    """Validate a community recipe draft and return the row payload."""
    if not draft.title.strip():
        raise ValidationError("Recipe title is required")
    if not draft.description.strip():
        raise ValidationError("Recipe description is required")
    ingredients = [item for item in draft.ingredients if item.strip()]
    if not ingredients:
        raise ValidationError("At least one ingredient is required")
    instructions = [item for item in draft.instructions if item.strip()]
    if not instructions:
        raise ValidationError("At least one instruction is required")
    if draft.image_url:
        validate_image_data_url(draft.image_url)
    return {
        "title": draft.title,
        "description": draft.description,
        "ingredients": ingredients,
        "instructions": instructions,
        "prep_time": parse_int(draft.prep_time),
        "cook_time": parse_int(draft.cook_time),
        "servings": parse_int(draft.servings),
        "category": draft.category or None,
        "cuisine": draft.cuisine or None,
        "difficulty": draft.difficulty,
        "image_url": draft.image_url or None,
    }


def validate_image_data_url(value: str) -> None:
    """Reject inline images that are not image/* or exceed the upload limit."""
    match = _DATA_URL.match(value)
    if match is None:
        return
    if not match.group("mime").startswith("image/"):
        raise ValidationError("Please select a valid image file")
    try:
        decoded = base64.b64decode(match.group("data"), validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Please select a valid image file") from exc
    if len(decoded) > MAX_IMAGE_BYTES:
        raise PayloadTooLargeError("Image size should be less than 5MB")


def card_from_database(recipe: DatabaseRecipe) -> RecipeCard:
    return RecipeCard(
        recipe_id=f"{DATABASE_ID_PREFIX}{recipe.id}",
        name=recipe.recipe_name,
        image_url=recipe.image_url,
        source=SOURCE_DATABASE,
        category=recipe.category,
        cuisine=recipe.cuisine,
    )


def card_from_community(recipe: CommunityRecipe) -> RecipeCard:
    return RecipeCard(
        recipe_id=str(recipe.id),
        name=recipe.title,
        image_url=recipe.image_url or PLACEHOLDER_IMAGE,
        source=SOURCE_COMMUNITY,
        category=recipe.category,
        cuisine=recipe.cuisine,
        is_user_recipe=True,
    )


def card_from_meal(meal: dict[str, object]) -> RecipeCard:
    return RecipeCard(
        recipe_id=str(meal.get("idMeal", "")),
        name=str(meal.get("strMeal") or ""),
        image_url=_optional_str(meal.get("strMealThumb")),
        source=SOURCE_MEALDB,
        category=_optional_str(meal.get("strCategory")),
        cuisine=_optional_str(meal.get("strArea")),
    )


def _details_from_meal(meal: dict[str, object]) -> RecipeDetails:
    return RecipeDetails(
        recipe_id=str(meal.get("idMeal", "")),
        name=str(meal.get("strMeal") or ""),
        source=SOURCE_MEALDB,
        image_url=_optional_str(meal.get("strMealThumb")),
        category=_optional_str(meal.get("strCategory")),
        cuisine=_optional_str(meal.get("strArea")),
        instructions=_split_steps(str(meal.get("strInstructions") or "")),
        ingredients=extract_ingredients(meal),
        nutrition=estimate_nutrition(meal),
        raw=meal,
    )


def _details_from_community(recipe: CommunityRecipe) -> RecipeDetails:
    return RecipeDetails(
        recipe_id=str(recipe.id),
        name=recipe.title,
        source=SOURCE_COMMUNITY,
        image_url=recipe.image_url or PLACEHOLDER_IMAGE,
        category=recipe.category,
        cuisine=recipe.cuisine,
        instructions=list(recipe.instructions),
        ingredients=[Ingredient(name=item, measure="") for item in recipe.ingredients],
        nutrition=None,
        author=recipe.author,
    )


def _details_from_database(recipe: DatabaseRecipe) -> RecipeDetails:
    ingredients = [
        Ingredient(name=part.strip(), measure="")
        for part in recipe.ingredients.split(",")
        if part.strip()
    ]
    return RecipeDetails(
        recipe_id=f"{DATABASE_ID_PREFIX}{recipe.id}",
        name=recipe.recipe_name,
        source=SOURCE_DATABASE,
        image_url=recipe.image_url,
        category=recipe.category,
        cuisine=recipe.cuisine,
        instructions=_split_steps(recipe.instructions),
        ingredients=ingredients,
        nutrition=None,
    )


def _split_steps(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def parse_int(value: object) -> int | None:
    """Parse a leading integer; zero and unparsable input become None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if not isinstance(value, str):
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1)) or None


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
