"""Row parsing helpers shared by the Supabase repositories."""

from datetime import datetime


def parse_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp column; empty values become None."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def optional_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    return int(value)
