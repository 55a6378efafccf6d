"""Food photo scan endpoint."""

from fastapi import APIRouter, Depends, Request

from biteqube.api.deps import get_container, get_optional_user
from biteqube.domain.errors import PayloadTooLargeError
from biteqube.domain.models import AuthUser
from biteqube.services.vision import (
    IMAGE_TOO_LARGE_MESSAGE,
    MAX_IMAGE_BYTES,
    validate_image_upload,
)

router = APIRouter(tags=["scan"])


@router.post("/scan")
async def scan_food(
    request: Request, user: AuthUser | None = Depends(get_optional_user)
) -> dict[str, object]:
    """Classify the raw image body and return matching recipes."""
    image_bytes = await read_image_body(request)
    validate_image_upload(image_bytes, request.headers.get("content-type"))
    outcome = await get_container(request).scan_service.scan(
        image_bytes, user.id if user else None
    )
    return {
        "label": outcome.label,
        "confidence": outcome.confidence,
        "predictions": outcome.predictions,
        "recipes": outcome.cards,
        "message": outcome.message,
        "xp_awarded": outcome.xp_awarded,
        "stats": outcome.stats,
    }


async def read_image_body(request: Request) -> bytes:
    """Read the upload, stopping as soon as it passes the size limit."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_IMAGE_BYTES:
        raise PayloadTooLargeError(IMAGE_TOO_LARGE_MESSAGE)
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_IMAGE_BYTES:
            raise PayloadTooLargeError(IMAGE_TOO_LARGE_MESSAGE)
    return bytes(body)
