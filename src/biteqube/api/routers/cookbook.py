"""Cookbook endpoints."""

from fastapi import APIRouter, Depends, Request, WebSocket

from biteqube.api.deps import get_container, get_current_user
from biteqube.api.realtime import relay_changes
from biteqube.domain.models import AuthUser
from biteqube.services.cookbook import SAVED_RECIPES_TABLE, VIEW_ALL

router = APIRouter(prefix="/cookbook", tags=["cookbook"])


@router.get("")
async def cookbook_view(
    request: Request,
    mode: str = VIEW_ALL,
    q: str | None = None,
    category: str | None = None,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    """Saved and community recipes, filtered by text and category."""
    cards = get_container(request).cookbook_service.view(user.id, mode, q, category)
    return {"recipes": cards}


@router.get("/saved")
async def saved_recipes(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    return {"recipes": get_container(request).cookbook_service.list_saved(user.id)}


@router.get("/{recipe_id}/saved")
async def is_saved(
    recipe_id: str, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, bool]:
    saved = get_container(request).cookbook_service.is_saved(user.id, recipe_id)
    return {"saved": saved}


@router.post("/{recipe_id}")
async def save_recipe(
    recipe_id: str, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    saved = await get_container(request).cookbook_service.save(user.id, recipe_id)
    return {"recipe": saved, "message": "Recipe saved to cookbook!"}


@router.delete("/{recipe_id}")
async def remove_recipe(
    recipe_id: str, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, str]:
    get_container(request).cookbook_service.remove(user.id, recipe_id)
    return {"message": "Recipe removed from cookbook"}


@router.post("/{recipe_id}/toggle")
async def toggle_saved(
    recipe_id: str, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, bool]:
    saved = await get_container(request).cookbook_service.toggle(user.id, recipe_id)
    return {"saved": saved}


@router.websocket("/changes")
async def cookbook_changes(websocket: WebSocket, token: str = "") -> None:
    """Push saved recipe inserts and deletes for the token's user."""
    await relay_changes(websocket, token, SAVED_RECIPES_TABLE)
