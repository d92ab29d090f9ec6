from .auth import Token, UserRead, UserRegister
from .comment import CommentCreate, CommentMentionRead, CommentRead, CommentUpdate
from .notification import MessageResponse, NotificationCreate, NotificationRead
from .session import DrinkingSessionCreate, DrinkingSessionRead

__all__ = [
    "CommentCreate",
    "CommentMentionRead",
    "CommentRead",
    "CommentUpdate",
    "DrinkingSessionCreate",
    "DrinkingSessionRead",
    "MessageResponse",
    "NotificationCreate",
    "NotificationRead",
    "Token",
    "UserRead",
    "UserRegister",
]
