"""Shopping list endpoints and the live change stream."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, WebSocket, status

from biteqube.api.deps import get_container, get_current_user
from biteqube.api.realtime import relay_changes
from biteqube.api.schemas import CheckedRequest, ShoppingItemsRequest
from biteqube.domain.models import AuthUser
from biteqube.services.shopping import SHOPPING_ITEMS_TABLE

router = APIRouter(prefix="/shopping-list", tags=["shopping"])


@router.get("")
async def list_items(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    return {"items": get_container(request).shopping_service.list_items(user.id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_items(
    body: ShoppingItemsRequest,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    items = get_container(request).shopping_service.add_items(user.id, body.items)
    return {"items": items}


@router.post("/from-recipe/{recipe_id}", status_code=status.HTTP_201_CREATED)
async def add_recipe_ingredients(
    recipe_id: str, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    """Add every ingredient of a recipe as a shopping list entry."""
    container = get_container(request)
    details = await container.recipe_service.get_details(recipe_id)
    items = container.shopping_service.add_ingredients(user.id, details.ingredients)
    return {"items": items, "message": "Ingredients added to shopping list!"}


@router.patch("/{item_id}")
async def set_checked(
    item_id: UUID,
    body: CheckedRequest,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    item = get_container(request).shopping_service.set_checked(
        user.id, item_id, body.is_checked
    )
    return {"item": item}


@router.post("/{item_id}/toggle")
async def toggle_item(
    item_id: UUID, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    item = get_container(request).shopping_service.toggle(user.id, item_id)
    return {"item": item}


@router.delete("/{item_id}")
async def delete_item(
    item_id: UUID, request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, str]:
    get_container(request).shopping_service.delete(user.id, item_id)
    return {"message": "Item removed"}


@router.delete("")
async def clear_list(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    result = get_container(request).shopping_service.clear(user.id)
    return {"removed": result.removed, "message": result.message}


@router.post("/clear-completed")
async def clear_completed(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    result = get_container(request).shopping_service.clear_completed(user.id)
    return {"removed": result.removed, "message": result.message}


@router.websocket("/changes")
async def shopping_changes(websocket: WebSocket, token: str = "") -> None:
    """Push shopping list row changes for the token's user."""
    await relay_changes(websocket, token, SHOPPING_ITEMS_TABLE)
