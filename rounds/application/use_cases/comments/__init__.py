"""Use cases for session comments."""

from .create_comment import create_comment
from .delete_comment import delete_comment
from .errors import CommentNotFoundError, CommentPermissionError, SessionNotFoundError
from .update_comment import update_comment

__all__ = [
    "CommentNotFoundError",
    "CommentPermissionError",
    "SessionNotFoundError",
    "create_comment",
    "delete_comment",
    "update_comment",
]
