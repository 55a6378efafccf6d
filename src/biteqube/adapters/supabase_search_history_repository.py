"""Supabase repository for recent searches."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from biteqube.adapters.supabase_rows import parse_datetime
from biteqube.domain.history import SearchEntry
from biteqube.services.history import SearchHistoryRepository


@dataclass
class SupabaseSearchHistoryRepository(SearchHistoryRepository):
    client: Client

    def add_entry(self, user_id: UUID, query: str) -> SearchEntry:
        response = (
            self.client.table("search_history")
            .insert(
                {
                    "user_id": str(user_id),
                    "query": query,
                    "searched_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save search")
        return _parse_entry(response.data[0])

    def list_recent(self, user_id: UUID, limit: int) -> list[SearchEntry]:
        response = (
            self.client.table("search_history")
            .select("*")
            .eq("user_id", str(user_id))
            .order("searched_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def clear(self, user_id: UUID) -> None:
        self.client.table("search_history").delete().eq(
            "user_id", str(user_id)
        ).execute()


def _parse_entry(row: dict[str, object]) -> SearchEntry:
    return SearchEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        query=str(row.get("query", "")),
        searched_at=parse_datetime(row.get("searched_at")),
    )
