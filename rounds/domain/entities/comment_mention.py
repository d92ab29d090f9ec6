"""Domain entities describing ``@username`` mentions inside comments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MentionParseResult:
    """A single ``@username`` token found in a block of text."""

    username: str
    start_position: int
    length: int


@dataclass
class CommentMention:
    """Persisted link between a comment and a user it references."""

    id: str | None
    comment_id: str
    mentioned_user_id: str
    start_position: int
    length: int
    created_at: datetime | None = None
    mentioned_username: str | None = None

    def validate_against(self, content: str) -> None:
        """Raise ``ValueError`` when the offsets do not fit inside ``content``."""

        if self.start_position < 0:
            raise ValueError("Mention start position must be non-negative")
        if self.length <= 0:
            raise ValueError("Mention length must be positive")
        if self.start_position + self.length > len(content):
            raise ValueError("Mention extends past the end of the comment")


__all__ = ["CommentMention", "MentionParseResult"]
