"""Saved recipes and the combined cookbook view."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.cookbook import SavedRecipe
from biteqube.domain.errors import NotFoundError, ValidationError
from biteqube.domain.realtime import DELETE, INSERT, ChangeEvent
from biteqube.domain.recipes import RecipeCard
from biteqube.services.realtime import ChangePublisher
from biteqube.services.recipes import SOURCE_SAVED, RecipeService, card_from_community

SAVED_RECIPES_TABLE = "saved_recipes"

VIEW_ALL = "all"
VIEW_SAVED = "saved"
VIEW_COMMUNITY = "community"
VIEW_MODES = (VIEW_ALL, VIEW_SAVED, VIEW_COMMUNITY)


class SavedRecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def save_recipe(self, user_id: UUID, meal: dict[str, object]) -> SavedRecipe:
        """Store a copy of a catalog meal for the user."""

    def list_saved(self, user_id: UUID) -> list[SavedRecipe]:
        """Return saved recipes, newest first."""

    def remove_recipe(self, user_id: UUID, recipe_id: str) -> list[SavedRecipe]:
        """Delete saved copies of a meal and return the removed rows."""


@dataclass
class CookbookService:
    """Application service for a user's cookbook."""

    repository: SavedRecipeRepository
    recipe_service: RecipeService
    publisher: ChangePublisher

    async def save(self, user_id: UUID, recipe_id: str) -> SavedRecipe:
        """Save a catalog meal by id; saving twice returns the existing copy."""
        existing = self._find(user_id, recipe_id)
        if existing:
            return existing
        meal = await self.recipe_service.get_meal(recipe_id)
        if not meal:
            raise NotFoundError("Recipe", recipe_id)
        saved = self.repository.save_recipe(user_id, meal)
        self.publisher.publish(
            user_id,
            ChangeEvent(
                table=SAVED_RECIPES_TABLE, event_type=INSERT, new=_row(saved)
            ),
        )
        return saved

    def remove(self, user_id: UUID, recipe_id: str) -> None:
        for removed in self.repository.remove_recipe(user_id, recipe_id):
            self.publisher.publish(
                user_id,
                ChangeEvent(
                    table=SAVED_RECIPES_TABLE, event_type=DELETE, old=_row(removed)
                ),
            )

    def list_saved(self, user_id: UUID) -> list[SavedRecipe]:
        return self.repository.list_saved(user_id)

    def is_saved(self, user_id: UUID, recipe_id: str) -> bool:
        return self._find(user_id, recipe_id) is not None

    async def toggle(self, user_id: UUID, recipe_id: str) -> bool:
        """Save or unsave a meal and return whether it is now saved."""
        if self.is_saved(user_id, recipe_id):
            self.remove(user_id, recipe_id)
            return False
        await self.save(user_id, recipe_id)
        return True

    def view(
        self,
        user_id: UUID,
        mode: str = VIEW_ALL,
        term: str | None = None,
        category: str | None = None,
    ) -> list[RecipeCard]:
        """Return cookbook cards for a view mode, filtered by text and category."""
        if mode not in VIEW_MODES:
            raise ValidationError(f"Unknown cookbook view: {mode}")
        cards: list[RecipeCard] = []
        if mode in {VIEW_ALL, VIEW_COMMUNITY}:
            cards.extend(
                card_from_community(recipe)
                for recipe in self.recipe_service.list_community_recipes()
            )
        if mode in {VIEW_ALL, VIEW_SAVED}:
            cards.extend(card_from_saved(saved) for saved in self.list_saved(user_id))

        if term:
            needle = term.lower()
            cards = [
                card
                for card in cards
                if needle in card.name.lower()
                or needle in (card.category or "").lower()
                or needle in (card.cuisine or "").lower()
            ]
        if category and category.lower() != VIEW_ALL:
            wanted = category.lower()
            cards = [card for card in cards if (card.category or "").lower() == wanted]
        return cards

    def _find(self, user_id: UUID, recipe_id: str) -> SavedRecipe | None:
        for saved in self.repository.list_saved(user_id):
            if saved.recipe_id == recipe_id:
                return saved
        return None


def card_from_saved(saved: SavedRecipe) -> RecipeCard:
    category = saved.data.get("strCategory")
    area = saved.data.get("strArea")
    return RecipeCard(
        recipe_id=saved.recipe_id,
        name=saved.recipe_name,
        image_url=saved.image_url,
        source=SOURCE_SAVED,
        category=category if isinstance(category, str) else None,
        cuisine=area if isinstance(area, str) else None,
    )


def _row(saved: SavedRecipe) -> dict[str, object]:
    return {
        "id": str(saved.id),
        "user_id": str(saved.user_id),
        "recipe_id": saved.recipe_id,
        "recipe_name": saved.recipe_name,
        "image_url": saved.image_url,
    }
