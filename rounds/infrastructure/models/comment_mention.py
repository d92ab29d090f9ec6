"""SQLAlchemy model for comment mentions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from rounds.infrastructure.database import Base
from rounds.utils import now_in_app_naive_datetime

from ._types import generate_uuid


class CommentMentionModel(Base):
    """Database representation of an ``@username`` reference in a comment."""

    __tablename__ = "comment_mention"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    comment_id = Column(
        String(36),
        ForeignKey("session_comment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mentioned_user_id = Column(
        String(36), ForeignKey("user.id"), nullable=False, index=True
    )
    start_position = Column(Integer, nullable=False)
    length = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    comment = relationship("SessionCommentModel", back_populates="mentions")
    mentioned_user = relationship("UserModel", lazy="joined")


__all__ = ["CommentMentionModel"]
