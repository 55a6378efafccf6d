"""Public visitor counter endpoints."""

from fastapi import APIRouter, Request

from biteqube.api.deps import get_container
from biteqube.api.schemas import TrackVisitRequest

router = APIRouter(prefix="/visitors", tags=["visitors"])


@router.post("/track")
async def track_visit(body: TrackVisitRequest, request: Request) -> dict[str, object]:
    """Count a page view; the response carries the session id to reuse."""
    container = get_container(request)
    visitor = container.visitor_service.track(
        body.session_id, request.headers.get("user-agent")
    )
    counts = container.visitor_service.counts()
    return {
        "session_id": visitor.session_id,
        "page_views": visitor.page_views,
        "active": counts.active,
        "total": counts.total,
    }


@router.get("/counts")
async def visitor_counts(request: Request) -> dict[str, int]:
    counts = get_container(request).visitor_service.counts()
    return {"active": counts.active, "total": counts.total}
