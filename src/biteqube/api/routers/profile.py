"""Profile, progress and theme endpoints."""

from fastapi import APIRouter, Depends, Request

from biteqube.api.deps import get_container, get_current_user
from biteqube.api.schemas import ThemeRequest, UpdateNameRequest
from biteqube.domain.models import AuthUser

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, object]:
    """Return the user with XP, streak, chef level and badges."""
    summary = get_container(request).profile_service.summary(user)
    return {"profile": summary}


@router.patch("/name")
async def update_name(
    body: UpdateNameRequest,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, object]:
    updated = get_container(request).profile_service.update_name(user.id, body.name)
    return {"user": updated, "message": "Profile updated successfully!"}


@router.get("/theme")
async def get_theme(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, str]:
    return {"theme": get_container(request).profile_service.get_theme(user.id)}


@router.put("/theme")
async def set_theme(
    body: ThemeRequest,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, str]:
    theme = get_container(request).profile_service.set_theme(user.id, body.theme)
    return {"theme": theme}


@router.post("/delete-request")
async def request_account_deletion(
    request: Request, user: AuthUser = Depends(get_current_user)
) -> dict[str, str]:
    message = get_container(request).profile_service.request_account_deletion(
        user.id
    )
    return {"message": message}
