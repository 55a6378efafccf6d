"""XP, streak and chef level bookkeeping."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from biteqube.domain.stats import Badge, LevelProgress, UserStats

XP_PER_SCAN = 10
XP_PER_LEVEL = 100

_XP_BADGES = (
    (100, Badge("First Century", "💯", "Earned 100 XP")),
    (500, Badge("Recipe Master", "👨‍🍳", "Earned 500 XP")),
    (1000, Badge("Culinary Expert", "🏆", "Earned 1000 XP")),
)
_STREAK_BADGES = (
    (7, Badge("Week Warrior", "⚡", "7-day streak")),
    (30, Badge("Monthly Master", "🔥", "30-day streak")),
)
_STREAK_EMOJI = ((30, "🏆"), (14, "🔥"), (7, "⚡"), (3, "🌟"))


class StatsRepository(Protocol):
    """Persistence interface for user stats."""

    def get_stats(self, user_id: UUID) -> UserStats | None:
        """Return the stats row for a user, if present."""

    def create_stats(self, user_id: UUID) -> UserStats:
        """Create a zeroed stats row and return it."""

    def update_stats(
        self, user_id: UUID, xp: int, streak_days: int, last_scan: datetime
    ) -> UserStats:
        """Persist new counters and return the updated row."""


@dataclass
class StatsService:
    """Application service for gamification counters."""

    repository: StatsRepository

    def get_or_create(self, user_id: UUID) -> UserStats:
        """Return the user's stats, creating a zero row on first access."""
        existing = self.repository.get_stats(user_id)
        if existing:
            return existing
        return self.repository.create_stats(user_id)

    def record_scan(self, user_id: UUID, now: datetime | None = None) -> UserStats:
        """Award scan XP and advance the daily streak."""
        current = self.get_or_create(user_id)
        scanned_at = now or datetime.now(tz=UTC)
        return self.repository.update_stats(
            user_id,
            xp=current.xp + XP_PER_SCAN,
            streak_days=next_streak(current, scanned_at),
            last_scan=scanned_at,
        )


def next_streak(stats: UserStats, scanned_at: datetime) -> int:
    """Keep the streak on a same-day scan, extend it after yesterday, else restart."""
    today = scanned_at.astimezone(UTC).date()
    last_day = stats.last_scan.astimezone(UTC).date() if stats.last_scan else None
    if last_day == today:
        return stats.streak_days
    if last_day == today - timedelta(days=1):
        return stats.streak_days + 1
    return 1


def level_progress(xp: int) -> LevelProgress:
    level = xp // XP_PER_LEVEL + 1
    next_level_xp = level * XP_PER_LEVEL
    level_floor = (level - 1) * XP_PER_LEVEL
    return LevelProgress(
        level=level,
        next_level_xp=next_level_xp,
        xp_to_next_level=next_level_xp - xp,
        progress_percent=(xp - level_floor) / (next_level_xp - level_floor) * 100,
    )


def badges(xp: int, streak_days: int) -> list[Badge]:
    earned = [badge for threshold, badge in _XP_BADGES if xp >= threshold]
    earned.extend(
        badge for threshold, badge in _STREAK_BADGES if streak_days >= threshold
    )
    return earned


def streak_emoji(days: int) -> str:
    for threshold, emoji in _STREAK_EMOJI:
        if days >= threshold:
            return emoji
    return "💫"
