"""Stripe checkout session endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from biteqube.api.deps import get_container
from biteqube.api.schemas import CheckoutRequest
from biteqube.domain.errors import CheckoutError, ValidationError

router = APIRouter(tags=["billing"])
logger = logging.getLogger(__name__)


@router.post("/api/create-checkout-session", response_model=None)
async def create_checkout_session(
    body: CheckoutRequest, request: Request
) -> dict[str, str] | JSONResponse:
    """Create a subscription checkout; errors use the ``{"error": ...}`` shape."""
    service = get_container(request).billing_service
    try:
        session = await service.create_checkout(
            body.plan, request.headers.get("origin")
        )
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"error": exc.message})
    except CheckoutError as exc:
        return JSONResponse(
            status_code=500, content={"error": exc.reason, "details": exc.message}
        )
    return {"sessionId": session.session_id, "url": session.url}
