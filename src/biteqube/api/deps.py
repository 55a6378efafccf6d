"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from biteqube.domain.errors import AuthError
from biteqube.domain.models import AuthUser  # noqa: TC001

if TYPE_CHECKING:
    from biteqube.containers import AppContainer

auth_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> AuthUser:
    """Resolve the Supabase access token in the Authorization header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Missing token")
    return get_container(request).auth_service.current_user(credentials.credentials)


async def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> AuthUser | None:
    """Like get_current_user, but anonymous requests resolve to None."""
    if credentials is None:
        return None
    return get_container(request).auth_service.current_user(credentials.credentials)
