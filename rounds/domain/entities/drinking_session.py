"""Domain entity representing a drinking session."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DrinkingSession:
    """A gathering that users comment on."""

    id: str | None
    name: str
    description: str | None
    starts_at: datetime | None
    ends_at: datetime | None
    created_by_id: str
    created_at: datetime | None
    updated_at: datetime | None = None


__all__ = ["DrinkingSession"]
