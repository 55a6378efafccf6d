"""Visitor counter models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VisitorStats:
    """Page-view counter for one browser session."""

    session_id: str
    page_views: int
    is_active: bool
    last_activity: datetime | None


@dataclass(frozen=True)
class VisitorCounts:
    active: int
    total: int
