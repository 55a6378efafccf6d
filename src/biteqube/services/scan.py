"""Scan flow: classify a food photo and match recipes to the label."""

import logging
import math
from dataclasses import dataclass, field
from uuid import UUID

from biteqube.domain.recipes import RecipeCard
from biteqube.domain.stats import UserStats
from biteqube.domain.vision import Classification
from biteqube.services.recipes import RecipeService, card_from_meal
from biteqube.services.search import candidate_words, found_message
from biteqube.services.stats import XP_PER_SCAN, StatsService
from biteqube.services.vision import VisionService

logger = logging.getLogger(__name__)

SCAN_SEARCH_LIMIT = 20
SCAN_SUGGESTION_COUNT = 12
UNKNOWN_LABEL = "All Recipes"


@dataclass(frozen=True)
class ScanOutcome:
    """What a scan detected, the recipes matched and the XP it earned."""

    label: str
    confidence: int
    cards: list[RecipeCard]
    message: str
    predictions: list[Classification] = field(default_factory=list)
    xp_awarded: int = 0
    stats: UserStats | None = None


@dataclass
class ScanService:
    vision_service: VisionService
    recipe_service: RecipeService
    stats_service: StatsService

    async def scan(
        self, image_bytes: bytes, user_id: UUID | None = None
    ) -> ScanOutcome:
        """Classify the image, find recipes for the top label and award XP."""
        predictions = await self.vision_service.classify(image_bytes)
        if not predictions:
            meals = await self.recipe_service.random_meals(SCAN_SUGGESTION_COUNT)
            return ScanOutcome(
                label=UNKNOWN_LABEL,
                confidence=0,
                cards=[card_from_meal(meal) for meal in meals],
                message=(
                    "Could not identify the food item. "
                    "Showing all available recipes."
                ),
            )

        top = predictions[0]
        logger.info(
            "Detected food", extra={"label": top.label, "score": round(top.score, 2)}
        )
        cards, message = await self._match_recipes(top.label)

        stats = None
        xp_awarded = 0
        if user_id is not None:
            try:
                stats = self.stats_service.record_scan(user_id)
                xp_awarded = XP_PER_SCAN
            except Exception:
                logger.exception(
                    "Failed to update user stats", extra={"user_id": str(user_id)}
                )

        return ScanOutcome(
            label=top.label,
            confidence=math.floor(top.score * 100 + 0.5),
            cards=cards,
            message=message,
            predictions=predictions,
            xp_awarded=xp_awarded,
            stats=stats,
        )

    async def _match_recipes(self, label: str) -> tuple[list[RecipeCard], str]:
        cards = self.recipe_service.search_all(label, SCAN_SEARCH_LIMIT).cards
        if not cards:
            for word in candidate_words(label):
                cards = self.recipe_service.search_all(word, SCAN_SEARCH_LIMIT).cards
                if cards:
                    logger.debug("Matched scan on word", extra={"word": word})
                    break
        if not cards:
            meals = await self.recipe_service.meals_by_name(label)
            cards = [card_from_meal(meal) for meal in meals]
        if not cards:
            meals = await self.recipe_service.random_meals(SCAN_SUGGESTION_COUNT)
            cards = [card_from_meal(meal) for meal in meals]
            if cards:
                return (
                    cards,
                    f'No exact matches for "{label}". '
                    "Showing all available recipes.",
                )
        if not cards:
            return cards, "No recipes available in database."
        return cards, found_message(len(cards), label)
