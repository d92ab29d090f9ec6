"""ORM models used by the application infrastructure."""

from .comment_mention import CommentMentionModel
from .drinking_session import DrinkingSessionModel
from .notification import NotificationModel
from .session_comment import SessionCommentModel
from .user import UserModel

__all__ = [
    "CommentMentionModel",
    "DrinkingSessionModel",
    "NotificationModel",
    "SessionCommentModel",
    "UserModel",
]
