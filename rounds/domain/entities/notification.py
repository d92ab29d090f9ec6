"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Message addressed to a single user.

    ``metadata`` is an opaque payload kept as serialized text. ``read`` only
    ever moves from ``False`` to ``True``.
    """

    id: str | None
    user_id: str
    type: str
    title: str
    message: str
    metadata: str | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification"]
