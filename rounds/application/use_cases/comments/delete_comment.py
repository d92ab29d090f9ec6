"""Use case for deleting a comment."""

from sqlalchemy.orm import Session

from rounds.domain.entities import User
from rounds.infrastructure.repositories import SessionCommentRepository

from .errors import CommentNotFoundError, CommentPermissionError


def delete_comment(session: Session, *, comment_id: str, user: User) -> None:
    """Delete the comment; its mentions go with it."""

    repository = SessionCommentRepository(session)
    comment = repository.get(comment_id)
    if comment is None:
        raise CommentNotFoundError(f"Comment {comment_id} not found")
    if comment.created_by_id != user.id:
        raise CommentPermissionError("Only the author can delete this comment")
    repository.delete(comment_id)
