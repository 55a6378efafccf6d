"""Recipe search and search history endpoints."""

from fastapi import APIRouter, Depends, Request

from biteqube.api.deps import get_container, get_current_user, get_optional_user
from biteqube.domain.models import AuthUser
from biteqube.services.search import POPULAR_SEARCHES

router = APIRouter(prefix="/search", tags=["search"])


@router.get("")
async def search(
    request: Request,
    q: str = "",
    user: AuthUser | None = Depends(get_optional_user),
) -> dict[str, object]:
    """Search every recipe source; signed-in users get the query recorded."""
    outcome = await get_container(request).search_service.search(
        q, user.id if user else None
    )
    return {
        "query": outcome.query,
        "recipes": outcome.cards,
        "database_count": outcome.database_count,
        "community_count": outcome.community_count,
        "fallback": outcome.fallback,
        "message": outcome.message,
    }


@router.get("/popular")
async def popular_searches() -> dict[str, object]:
    return {"searches": list(POPULAR_SEARCHES)}


@router.get("/history")
async def recent_searches(
    request: Request,
    limit: int = 10,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    entries = get_container(request).history_service.recent(user.id, limit)
    return {"searches": entries}


@router.delete("/history")
async def clear_history(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, str]:
    get_container(request).history_service.clear(user.id)
    return {"message": "Search history cleared"}
