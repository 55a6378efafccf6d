"""Recipe browsing and community recipe endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from biteqube.api.deps import get_container, get_current_user
from biteqube.domain.models import AuthUser
from biteqube.domain.recipes import CommunityRecipeDraft
from biteqube.services.recipes import (
    card_from_community,
    card_from_database,
    card_from_meal,
    clean_draft,
)

router = APIRouter(tags=["recipes"])


@router.get("/recipes/random")
async def random_meals(request: Request, count: int = 6) -> dict[str, object]:
    """Random TheMealDB meals for the dashboard."""
    meals = await get_container(request).recipe_service.random_meals(count)
    return {"recipes": [card_from_meal(meal) for meal in meals]}


@router.get("/recipes/suggestions")
async def suggestions(request: Request, limit: int = 12) -> dict[str, object]:
    recipes = get_container(request).recipe_service.random_recipes(limit)
    return {"recipes": [card_from_database(recipe) for recipe in recipes]}


@router.get("/recipes/cuisines")
async def cuisines(request: Request) -> dict[str, object]:
    return {"cuisines": get_container(request).recipe_service.cuisines()}


@router.get("/recipes/cuisines/{cuisine}")
async def recipes_by_cuisine(
    cuisine: str, request: Request, limit: int = 20
) -> dict[str, object]:
    recipes = get_container(request).recipe_service.recipes_by_cuisine(cuisine, limit)
    return {"recipes": [card_from_database(recipe) for recipe in recipes]}


@router.get("/recipes/categories/{category}")
async def meals_by_category(category: str, request: Request) -> dict[str, object]:
    meals = await get_container(request).recipe_service.meals_by_category(category)
    return {"recipes": [card_from_meal(meal) for meal in meals]}


@router.get("/recipes/{recipe_id}")
async def recipe_details(recipe_id: str, request: Request) -> dict[str, object]:
    """Resolve a catalog, table or community recipe id to its full view."""
    details = await get_container(request).recipe_service.get_details(recipe_id)
    return {"recipe": details}


@router.get("/community-recipes")
async def community_recipes(request: Request) -> dict[str, object]:
    recipes = get_container(request).recipe_service.list_community_recipes()
    return {
        "recipes": recipes,
        "cards": [card_from_community(recipe) for recipe in recipes],
    }


@router.get("/community-recipes/mine")
async def own_recipes(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    return {
        "recipes": get_container(request).recipe_service.list_own_recipes(user.id)
    }


@router.post("/community-recipes", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    draft: CommunityRecipeDraft,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    recipe = get_container(request).recipe_service.create_community_recipe(
        user.id, draft
    )
    return {"recipe": recipe, "message": "Recipe created successfully!"}


@router.put("/community-recipes/{recipe_id}")
async def update_recipe(
    recipe_id: UUID,
    draft: CommunityRecipeDraft,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    """Replace a recipe the caller owns."""
    recipe = get_container(request).recipe_service.update_community_recipe(
        recipe_id, user.id, clean_draft(draft)
    )
    return {"recipe": recipe}


@router.delete("/community-recipes/{recipe_id}")
async def delete_recipe(
    recipe_id: UUID,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, str]:
    get_container(request).recipe_service.delete_community_recipe(recipe_id, user.id)
    return {"message": "Recipe deleted"}
