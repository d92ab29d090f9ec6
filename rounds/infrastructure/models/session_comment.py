"""SQLAlchemy model for session comments."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from rounds.infrastructure.database import Base
from rounds.utils import now_in_app_naive_datetime

from ._types import generate_uuid


class SessionCommentModel(Base):
    """Database representation of a comment written inside a session."""

    __tablename__ = "session_comment"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    session_id = Column(
        String(36),
        ForeignKey("drinking_session.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_by_id = Column(String(36), ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_by_id = Column(String(36), ForeignKey("user.id"), nullable=True)
    updated_at = Column(DateTime, nullable=True)

    session = relationship("DrinkingSessionModel", back_populates="comments")
    mentions = relationship(
        "CommentMentionModel",
        back_populates="comment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CommentMentionModel.start_position",
    )


__all__ = ["SessionCommentModel"]
