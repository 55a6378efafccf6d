"""Ingredient parsing and nutrition estimates for catalog meals."""

import math

from biteqube.domain.recipes import Ingredient, NutritionEstimate

MAX_INGREDIENT_SLOTS = 20
BASE_CALORIES = 300
CALORIES_PER_INGREDIENT = 25


def extract_ingredients(meal: dict[str, object]) -> list[Ingredient]:
    """Collect the numbered ingredient/measure slots of a TheMealDB meal."""
    ingredients: list[Ingredient] = []
    for slot in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = meal.get(f"strIngredient{slot}")
        if not isinstance(name, str) or not name.strip():
            continue
        measure = meal.get(f"strMeasure{slot}")
        ingredients.append(
            Ingredient(
                name=name.strip(),
                measure=measure.strip() if isinstance(measure, str) else "",
            )
        )
    return ingredients


def estimate_nutrition(meal: dict[str, object]) -> NutritionEstimate:
    """Rough estimate: a fixed base plus a flat amount per ingredient."""
    calories = BASE_CALORIES + len(extract_ingredients(meal)) * CALORIES_PER_INGREDIENT
    return NutritionEstimate(
        calories=calories,
        protein=_round_half_up(calories * 0.15 / 4),
        carbs=_round_half_up(calories * 0.45 / 4),
        fat=_round_half_up(calories * 0.30 / 9),
    )


def shopping_line(ingredient: Ingredient) -> str:
    """Format an ingredient as a shopping list entry."""
    return f"{ingredient.measure} {ingredient.name}".strip()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
