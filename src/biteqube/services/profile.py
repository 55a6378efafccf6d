"""Profile, theme preference and progress summary."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.errors import ValidationError
from biteqube.domain.models import AuthUser, UserProfile
from biteqube.domain.stats import Badge, LevelProgress, UserStats
from biteqube.services.auth import AuthClient
from biteqube.services.stats import StatsService, badges, level_progress, streak_emoji

logger = logging.getLogger(__name__)

DEFAULT_THEME = "light"
THEMES = ("light", "dark")


class UserRepository(Protocol):
    """Persistence interface for the public users table."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row, if present."""

    def set_theme(self, user_id: UUID, theme: str) -> None:
        """Persist the theme preference."""


@dataclass(frozen=True)
class ProfileSummary:
    """Everything the profile and dashboard pages show."""

    user: AuthUser
    stats: UserStats
    level: LevelProgress
    badges: list[Badge]
    streak_emoji: str
    theme: str


@dataclass
class ProfileService:
    auth_client: AuthClient
    users: UserRepository
    stats_service: StatsService

    def summary(self, user: AuthUser) -> ProfileSummary:
        stats = self.stats_service.get_or_create(user.id)
        return ProfileSummary(
            user=user,
            stats=stats,
            level=level_progress(stats.xp),
            badges=badges(stats.xp, stats.streak_days),
            streak_emoji=streak_emoji(stats.streak_days),
            theme=self.get_theme(user.id),
        )

    def update_name(self, user_id: UUID, name: str) -> AuthUser:
        cleaned = name.strip()
        if not cleaned:
            raise ValidationError("Name is required")
        return self.auth_client.update_user(user_id, name=cleaned)

    def get_theme(self, user_id: UUID) -> str:
        """Return the stored theme, defaulting to light."""
        try:
            profile = self.users.get_profile(user_id)
        except Exception:
            logger.exception(
                "Error loading user theme", extra={"user_id": str(user_id)}
            )
            return DEFAULT_THEME
        if profile and profile.theme in THEMES:
            return profile.theme
        return DEFAULT_THEME

    def set_theme(self, user_id: UUID, theme: str) -> str:
        if theme not in THEMES:
            raise ValidationError(f"Theme must be one of: {', '.join(THEMES)}")
        self.users.set_theme(user_id, theme)
        return theme

    def request_account_deletion(self, user_id: UUID) -> str:
        logger.info("Account deletion requested", extra={"user_id": str(user_id)})
        return (
            "Account deletion requested. "
            "Please contact support to complete this process."
        )
