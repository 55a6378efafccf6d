"""In-process row change feed."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from biteqube.domain.realtime import DELETE, INSERT, UPDATE, ChangeEvent

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[ChangeEvent], None]


class ChangePublisher(Protocol):
    """Interface used by services to announce row changes."""

    def publish(self, user_id: UUID, event: ChangeEvent) -> None:
        """Deliver an event to subscribers of the table for this user."""


@dataclass
class ChangeFeed(ChangePublisher):
    """Fan out row changes to per-user, per-table subscribers."""

    _handlers: dict[tuple[str, UUID], list[ChangeHandler]] = field(
        default_factory=dict
    )

    def subscribe(
        self, table: str, user_id: UUID, handler: ChangeHandler
    ) -> Callable[[], None]:
        """Register a handler and return a callable that removes it."""
        key = (table, user_id)
        self._handlers.setdefault(key, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._handlers.pop(key, None)

        return unsubscribe

    def publish(self, user_id: UUID, event: ChangeEvent) -> None:
        """Deliver an event to each subscriber in registration order."""
        for handler in list(self._handlers.get((event.table, user_id), [])):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Change handler failed",
                    extra={"table": event.table, "user_id": str(user_id)},
                )

    def subscriber_count(self, table: str, user_id: UUID) -> int:
        return len(self._handlers.get((table, user_id), []))


def apply_change(
    rows: list[dict[str, object]], event: ChangeEvent, key: str
) -> list[dict[str, object]]:
    """Return rows with the event applied, matching updates and deletes on key."""
    if event.event_type == INSERT:
        return [event.new, *rows]
    if event.event_type == UPDATE:
        return [
            event.new if row.get(key) == event.new.get(key) else row for row in rows
        ]
    if event.event_type == DELETE:
        return [row for row in rows if row.get(key) != event.old.get(key)]
    return rows
