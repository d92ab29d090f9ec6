"""Domain entities exposed by the application."""

from .comment_mention import CommentMention, MentionParseResult
from .drinking_session import DrinkingSession
from .notification import Notification
from .session_comment import SessionComment
from .user import User

__all__ = [
    "CommentMention",
    "DrinkingSession",
    "MentionParseResult",
    "Notification",
    "SessionComment",
    "User",
]
