"""Authentication flows delegated to Supabase Auth."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.errors import AuthError, ValidationError
from biteqube.domain.models import AuthSession, AuthUser

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthClient(Protocol):
    """Interface for the hosted auth provider."""

    def sign_up(self, email: str, password: str, name: str | None) -> AuthUser:
        """Register a user; the provider sends a verification email."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""

    def oauth_url(self, provider: str, redirect_to: str) -> str:
        """Return the provider URL that starts an OAuth sign in."""

    def send_password_reset(self, email: str, redirect_to: str) -> None:
        """Email a password reset link."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve an access token to its user."""

    def update_user(
        self,
        user_id: UUID,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> AuthUser:
        """Update profile metadata or password for a user."""


@dataclass
class AuthService:
    """Validates auth form input before handing it to the provider."""

    client: AuthClient
    public_origin: str

    def sign_up(
        self,
        email: str,
        password: str,
        name: str | None = None,
        confirm_password: str | None = None,
    ) -> AuthUser:
        _require_email(email)
        if confirm_password is not None and confirm_password != password:
            raise ValidationError("Passwords do not match")
        _check_password(password)
        return self.client.sign_up(email.strip(), password, name)

    def sign_in(self, email: str, password: str) -> AuthSession:
        _require_email(email)
        if not password:
            raise ValidationError("Password is required")
        return self.client.sign_in(email.strip(), password)

    def google_sign_in_url(self) -> str:
        return self.client.oauth_url("google", f"{self.public_origin}/dashboard")

    def request_password_reset(self, email: str) -> None:
        _require_email(email)
        self.client.send_password_reset(
            email.strip(), f"{self.public_origin}/reset-password"
        )

    def update_password(
        self, user_id: UUID, password: str, confirm_password: str
    ) -> AuthUser:
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        _check_password(password)
        return self.client.update_user(user_id, password=password)

    def current_user(self, access_token: str) -> AuthUser:
        """Return the user for a bearer token or raise AuthError."""
        try:
            user = self.client.get_user(access_token)
        except AuthError:
            raise
        except Exception as exc:
            logger.warning("Access token lookup failed: %s", type(exc).__name__)
            raise AuthError("Invalid or expired session") from exc
        if user is None:
            raise AuthError("Invalid or expired session")
        return user


def _require_email(email: str) -> None:
    if not email or not email.strip():
        raise ValidationError("Please enter your email address")


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters long")
