"""Text and voice recipe search with a fallback chain."""

import logging
from dataclasses import dataclass
from uuid import UUID

from biteqube.domain.errors import ValidationError
from biteqube.domain.recipes import RecipeCard
from biteqube.services.history import SearchHistoryService
from biteqube.services.recipes import RecipeService, card_from_database, card_from_meal

logger = logging.getLogger(__name__)

SUGGESTION_COUNT = 12
MIN_WORD_LENGTH = 4

POPULAR_SEARCHES = (
    "chicken",
    "beef",
    "pasta",
    "pizza",
    "salad",
    "curry",
    "soup",
    "dessert",
    "seafood",
    "vegan",
)


@dataclass(frozen=True)
class SearchOutcome:
    """Results shown for a query and how they were obtained."""

    query: str
    cards: list[RecipeCard]
    database_count: int
    community_count: int
    fallback: bool
    message: str


@dataclass
class SearchService:
    """Search the recipe table, community recipes and TheMealDB in turn."""

    recipe_service: RecipeService
    history_service: SearchHistoryService

    async def search(self, query: str, user_id: UUID | None = None) -> SearchOutcome:
        """Run the fallback chain and record the query for signed-in users."""
        term = query.strip()
        if not term:
            raise ValidationError("Please enter a search term")
        try:
            outcome = await self._search_chain(term)
        except Exception:
            logger.exception("Recipe search failed", extra={"term": term})
            cards = [
                card_from_database(recipe)
                for recipe in self.recipe_service.random_recipes(SUGGESTION_COUNT)
            ]
            return SearchOutcome(
                query=term,
                cards=cards,
                database_count=0,
                community_count=0,
                fallback=True,
                message="Failed to search recipes. Showing random recipes instead",
            )
        if outcome.cards and user_id is not None:
            self._record_history(user_id, term)
        return outcome

    async def _search_chain(self, term: str) -> SearchOutcome:
        combined = self.recipe_service.search_all(term)
        if combined.cards:
            return SearchOutcome(
                query=term,
                cards=combined.cards,
                database_count=combined.database_count,
                community_count=combined.community_count,
                fallback=False,
                message=_found_message(
                    len(combined.cards),
                    term,
                    combined.database_count,
                    combined.community_count,
                ),
            )

        logger.debug("No table matches, trying TheMealDB", extra={"term": term})
        meals = await self.recipe_service.meals_by_name(term)
        if not meals:
            for word in candidate_words(term):
                meals = await self.recipe_service.meals_by_name(word)
                if meals:
                    logger.debug("Matched on word", extra={"word": word})
                    break
        if meals:
            cards = [card_from_meal(meal) for meal in meals]
            return SearchOutcome(
                query=term,
                cards=cards,
                database_count=0,
                community_count=0,
                fallback=False,
                message=_found_message(len(cards), term, 0, 0),
            )

        suggestions = [
            card_from_database(recipe)
            for recipe in self.recipe_service.random_recipes(SUGGESTION_COUNT)
        ]
        if not suggestions:
            suggestions = [
                card_from_meal(meal)
                for meal in await self.recipe_service.random_meals(SUGGESTION_COUNT)
            ]
        return SearchOutcome(
            query=term,
            cards=suggestions,
            database_count=0,
            community_count=0,
            fallback=True,
            message=(
                f'No exact matches for "{term}". Here are some recipe suggestions!'
            ),
        )

    def _record_history(self, user_id: UUID, term: str) -> None:
        try:
            self.history_service.record(user_id, term)
        except Exception:
            logger.exception(
                "Failed to save search history", extra={"user_id": str(user_id)}
            )


def candidate_words(phrase: str) -> list[str]:
    """Words worth retrying on their own, skipping short ones and the phrase itself."""
    words = []
    for word in phrase.split():
        if len(word) < MIN_WORD_LENGTH or word == phrase or word in words:
            continue
        words.append(word)
    return words


def found_message(count: int, term: str) -> str:
    plural = "s" if count > 1 else ""
    return f'Found {count} recipe{plural} for "{term}"!'


def _found_message(count: int, term: str, database: int, community: int) -> str:
    message = found_message(count, term)
    if database > 0 and community > 0:
        message += f" ({database} from database, {community} from community)"
    elif community > 0:
        message += f" ({community} from community recipes)"
    return message
