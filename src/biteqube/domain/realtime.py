"""Row change events."""

from dataclasses import dataclass, field

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change on a table, shaped like a Postgres change payload."""

    table: str
    event_type: str
    new: dict[str, object] = field(default_factory=dict)
    old: dict[str, object] = field(default_factory=dict)
