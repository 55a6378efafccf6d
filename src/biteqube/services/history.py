"""Search history service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from biteqube.domain.history import SearchEntry


class SearchHistoryRepository(Protocol):
    """Persistence interface for search history."""

    def add_entry(self, user_id: UUID, query: str) -> SearchEntry:
        """Store a query for the user."""

    def list_recent(self, user_id: UUID, limit: int) -> list[SearchEntry]:
        """Return the newest entries first."""

    def clear(self, user_id: UUID) -> None:
        """Delete all entries for the user."""


@dataclass
class SearchHistoryService:
    repository: SearchHistoryRepository

    def record(self, user_id: UUID, query: str) -> SearchEntry | None:
        """Store a trimmed query; blank queries are ignored."""
        cleaned = query.strip()
        if not cleaned:
            return None
        return self.repository.add_entry(user_id, cleaned)

    def recent(self, user_id: UUID, limit: int = 10) -> list[SearchEntry]:
        return self.repository.list_recent(user_id, limit)

    def clear(self, user_id: UUID) -> None:
        self.repository.clear(user_id)
