"""Gamification models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserStats:
    """XP and streak counters for a user."""

    user_id: UUID
    xp: int
    streak_days: int
    last_scan: datetime | None


@dataclass(frozen=True)
class Badge:
    name: str
    icon: str
    description: str


@dataclass(frozen=True)
class LevelProgress:
    """Chef level derived from XP."""

    level: int
    next_level_xp: int
    xp_to_next_level: int
    progress_percent: float
