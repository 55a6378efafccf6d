"""Recipe models for the catalog, community recipes and search results."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class DatabaseRecipe:
    """Row from the imported recipes table."""

    id: int
    recipe_name: str
    ingredients: str
    instructions: str
    cuisine: str | None
    category: str | None
    total_time_mins: int | None
    ingredient_count: int | None
    image_url: str | None
    source_url: str | None


@dataclass(frozen=True)
class RecipeAuthor:
    id: UUID
    email: str | None
    name: str | None


@dataclass(frozen=True)
class CommunityRecipe:
    """User-authored recipe visible to everyone."""

    id: UUID
    user_id: UUID
    title: str
    description: str
    ingredients: list[str]
    instructions: list[str]
    prep_time: int | None
    cook_time: int | None
    servings: int | None
    category: str | None
    cuisine: str | None
    difficulty: str | None
    image_url: str | None
    is_public: bool
    created_at: datetime | None
    author: RecipeAuthor | None = None


class CommunityRecipeDraft(BaseModel):
    """Raw form input for a community recipe, cleaned by the recipe service."""

    title: str = ""
    description: str = ""
    ingredients: list[str] = Field(default_factory=lambda: [""])
    instructions: list[str] = Field(default_factory=lambda: [""])
    prep_time: str | int | None = None
    cook_time: str | int | None = None
    servings: str | int | None = None
    category: str | None = None
    cuisine: str | None = None
    difficulty: str = "Easy"
    image_url: str | None = None


@dataclass(frozen=True)
class Ingredient:
    name: str
    measure: str


@dataclass(frozen=True)
class NutritionEstimate:
    """Placeholder nutrition figures derived from the ingredient count."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class RecipeCard:
    """Display-ready recipe summary from any source."""

    recipe_id: str
    name: str
    image_url: str | None
    source: str
    category: str | None = None
    cuisine: str | None = None
    is_user_recipe: bool = False


@dataclass(frozen=True)
class SearchResult:
    """Combined database and community search results."""

    cards: list[RecipeCard]
    database_count: int
    community_count: int


@dataclass(frozen=True)
class RecipeDetails:
    """Full recipe view with ingredients and, for catalog meals, nutrition."""

    recipe_id: str
    name: str
    source: str
    image_url: str | None
    category: str | None
    cuisine: str | None
    instructions: list[str]
    ingredients: list[Ingredient]
    nutrition: NutritionEstimate | None
    raw: dict[str, object] = field(default_factory=dict)
    author: RecipeAuthor | None = None
