"""Repository implementations for infrastructure layer."""

from .comment_mention_repository import CommentMentionRepository
from .drinking_session_repository import DrinkingSessionRepository
from .notification_repository import NotificationRepository
from .session_comment_repository import SessionCommentRepository
from .user_repository import UserRepository

__all__ = [
    "CommentMentionRepository",
    "DrinkingSessionRepository",
    "NotificationRepository",
    "SessionCommentRepository",
    "UserRepository",
]
