"""Sign up, sign in and password endpoints."""

from fastapi import APIRouter, Depends, Request, status

from biteqube.api.deps import get_container, get_current_user
from biteqube.api.schemas import (
    PasswordResetRequest,
    SignInRequest,
    SignUpRequest,
    UpdatePasswordRequest,
)
from biteqube.domain.models import AuthUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(body: SignUpRequest, request: Request) -> dict[str, object]:
    user = get_container(request).auth_service.sign_up(
        body.email, body.password, body.name, confirm_password=body.confirm_password
    )
    return {
        "user": user,
        "message": "Account created! Please check your email to verify.",
    }


@router.post("/signin")
async def sign_in(body: SignInRequest, request: Request) -> dict[str, object]:
    session = get_container(request).auth_service.sign_in(body.email, body.password)
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "user": session.user,
    }


@router.get("/google")
async def google_sign_in(request: Request) -> dict[str, str]:
    """Return the URL that starts Google OAuth, redirecting to the dashboard."""
    return {"url": get_container(request).auth_service.google_sign_in_url()}


@router.post("/password-reset")
async def request_password_reset(
    body: PasswordResetRequest, request: Request
) -> dict[str, str]:
    get_container(request).auth_service.request_password_reset(body.email)
    return {"message": "Password reset email sent! Check your inbox."}


@router.post("/password")
async def update_password(
    body: UpdatePasswordRequest,
    request: Request,
    user: AuthUser = Depends(get_current_user),
) -> dict[str, str]:
    get_container(request).auth_service.update_password(
        user.id, body.password, body.confirm_password
    )
    return {"message": "Password updated successfully!"}


@router.get("/me")
async def me(user: AuthUser = Depends(get_current_user)) -> dict[str, object]:
    return {"user": user}
