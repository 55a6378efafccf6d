"""Search history models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SearchEntry:
    id: UUID
    user_id: UUID
    query: str
    searched_at: datetime | None
