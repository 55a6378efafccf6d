"""Anonymous visitor counter."""

import logging
import random
import string
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from biteqube.domain.visitors import VisitorCounts, VisitorStats

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


class VisitorRepository(Protocol):
    """Persistence interface for visitor_stats and its counting functions."""

    def get_visitor(self, session_id: str) -> VisitorStats | None:
        """Return the counter row for a session, if any."""

    def insert_visitor(
        self, session_id: str, user_agent: str | None, now: datetime
    ) -> VisitorStats:
        """Create the first counter row for a session."""

    def touch_visitor(
        self, session_id: str, page_views: int, now: datetime
    ) -> VisitorStats:
        """Mark a session active and store its new page view count."""

    def count_active(self) -> int:
        """Number of sessions active recently."""

    def count_total(self) -> int:
        """Number of sessions ever seen."""


@dataclass
class VisitorService:
    repository: VisitorRepository
    rng: random.Random = field(default_factory=random.Random)

    def new_session_id(self) -> str:
        suffix = "".join(self.rng.choice(_BASE36) for _ in range(9))
        return f"session_{int(time.time() * 1000)}_{suffix}"

    def track(
        self,
        session_id: str | None,
        user_agent: str | None = None,
        now: datetime | None = None,
    ) -> VisitorStats:
        """Record a page view, creating the session row on first visit."""
        current = now or datetime.now(tz=UTC)
        session_id = session_id or self.new_session_id()
        existing = self.repository.get_visitor(session_id)
        if existing is None:
            return self.repository.insert_visitor(session_id, user_agent, current)
        return self.repository.touch_visitor(
            session_id, existing.page_views + 1, current
        )

    def counts(self) -> VisitorCounts:
        return VisitorCounts(
            active=self._safe_count(self.repository.count_active, "active"),
            total=self._safe_count(self.repository.count_total, "total"),
        )

    def _safe_count(self, counter, label: str) -> int:
        try:
            return counter() or 0
        except Exception:
            logger.exception("Error counting visitors", extra={"counter": label})
            return 0
