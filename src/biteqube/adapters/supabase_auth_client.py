"""Supabase Auth adapter."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from biteqube.domain.errors import AuthError
from biteqube.domain.models import AuthSession, AuthUser
from biteqube.services.auth import AuthClient

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthClient(AuthClient):
    """Auth flows against GoTrue.

    Public flows run on the anon-key client. Resolving tokens and updating
    users goes through the service-role client.
    """

    public_client: Client
    admin_client: Client

    def sign_up(self, email: str, password: str, name: str | None) -> AuthUser:
        options = {"data": {"name": name}} if name else {}
        try:
            response = self.public_client.auth.sign_up(
                {"email": email, "password": password, "options": options}
            )
        except Exception as exc:
            raise AuthError(_auth_message(exc)) from exc
        if response.user is None:
            raise AuthError("Sign up failed")
        return _to_user(response.user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self.public_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise AuthError(_auth_message(exc)) from exc
        if response.session is None or response.user is None:
            raise AuthError("Invalid login credentials")
        return AuthSession(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            user=_to_user(response.user),
        )

    def oauth_url(self, provider: str, redirect_to: str) -> str:
        response = self.public_client.auth.sign_in_with_oauth(
            {"provider": provider, "options": {"redirect_to": redirect_to}}
        )
        return response.url

    def send_password_reset(self, email: str, redirect_to: str) -> None:
        try:
            self.public_client.auth.reset_password_for_email(
                email, {"redirect_to": redirect_to}
            )
        except Exception as exc:
            raise AuthError(_auth_message(exc)) from exc

    def get_user(self, access_token: str) -> AuthUser | None:
        response = self.admin_client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return _to_user(response.user)

    def update_user(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> AuthUser:
        attributes: dict[str, object] = {}
        if name is not None:
            attributes["user_metadata"] = {"name": name}
        if password is not None:
            attributes["password"] = password
        try:
            response = self.admin_client.auth.admin.update_user_by_id(
                str(user_id), attributes
            )
        except Exception as exc:
            logger.exception("User update failed", extra={"user_id": str(user_id)})
            raise AuthError(_auth_message(exc)) from exc
        return _to_user(response.user)


def _to_user(user) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    name = metadata.get("name") if isinstance(metadata, dict) else None
    return AuthUser(
        id=UUID(str(user.id)),
        email=getattr(user, "email", None),
        name=name,
    )


def _auth_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)
