"""Supabase repository for the visitor counter."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from biteqube.adapters.supabase_rows import parse_datetime
from biteqube.domain.visitors import VisitorStats
from biteqube.services.visitors import VisitorRepository


@dataclass
class SupabaseVisitorRepository(VisitorRepository):
    client: Client

    def get_visitor(self, session_id: str) -> VisitorStats | None:
        response = (
            self.client.table("visitor_stats")
            .select("*")
            .eq("session_id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_visitor(response.data[0])

    def insert_visitor(
        self, session_id: str, user_agent: str | None, now: datetime
    ) -> VisitorStats:
        response = (
            self.client.table("visitor_stats")
            .insert(
                {
                    "session_id": session_id,
                    "user_agent": user_agent,
                    "is_active": True,
                    "last_activity": now.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to track visitor")
        return _parse_visitor(response.data[0])

    def touch_visitor(
        self, session_id: str, page_views: int, now: datetime
    ) -> VisitorStats:
        response = (
            self.client.table("visitor_stats")
            .update(
                {
                    "last_activity": now.isoformat(),
                    "page_views": page_views,
                    "is_active": True,
                }
            )
            .eq("session_id", session_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update visitor")
        return _parse_visitor(response.data[0])

    def count_active(self) -> int:
        return _as_count(self.client.rpc("get_active_visitors").execute().data)

    def count_total(self) -> int:
        return _as_count(self.client.rpc("get_total_visitors").execute().data)


def _as_count(value: object) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int | float | str):
        return int(value)
    return 0


def _parse_visitor(row: dict[str, object]) -> VisitorStats:
    return VisitorStats(
        session_id=str(row["session_id"]),
        page_views=int(row.get("page_views") or 1),
        is_active=bool(row.get("is_active", True)),
        last_activity=parse_datetime(row.get("last_activity")),
    )
