"""Domain entity representing a comment on a drinking session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .comment_mention import CommentMention


@dataclass
class SessionComment:
    """Free-text comment written by a user inside a session."""

    id: str | None
    session_id: str
    user_id: str
    content: str
    created_by_id: str
    created_at: datetime | None
    updated_at: datetime | None = None
    updated_by_id: str | None = None
    mentions: list[CommentMention] = field(default_factory=list)


__all__ = ["SessionComment"]
