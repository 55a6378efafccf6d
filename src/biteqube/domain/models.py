"""Identity and profile models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """User identity as reported by Supabase Auth."""

    id: UUID
    email: str | None
    name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Tokens returned after a successful sign in."""

    access_token: str
    refresh_token: str | None
    user: AuthUser


@dataclass(frozen=True)
class UserProfile:
    """Row from the public users table."""

    id: UUID
    email: str | None
    name: str | None
    theme: str | None
