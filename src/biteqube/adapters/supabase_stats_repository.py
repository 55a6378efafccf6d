"""Supabase repository for XP and streak counters."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from biteqube.adapters.supabase_rows import parse_datetime
from biteqube.domain.stats import UserStats
from biteqube.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for user_stats rows."""

    client: Client

    def get_stats(self, user_id: UUID) -> UserStats | None:
        response = (
            self.client.table("user_stats")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_stats(response.data[0])

    def create_stats(self, user_id: UUID) -> UserStats:
        response = (
            self.client.table("user_stats")
            .insert({"user_id": str(user_id), "xp": 0, "streak_days": 0})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user stats")
        return _parse_stats(response.data[0])

    def update_stats(
        self, user_id: UUID, xp: int, streak_days: int, last_scan: datetime
    ) -> UserStats:
        response = (
            self.client.table("user_stats")
            .update(
                {
                    "xp": xp,
                    "streak_days": streak_days,
                    "last_scan": last_scan.isoformat(),
                }
            )
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user stats")
        return _parse_stats(response.data[0])


def _parse_stats(row: dict[str, object]) -> UserStats:
    return UserStats(
        user_id=UUID(str(row["user_id"])),
        xp=int(row.get("xp") or 0),
        streak_days=int(row.get("streak_days") or 0),
        last_scan=parse_datetime(row.get("last_scan")),
    )
