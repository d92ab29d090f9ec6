"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from rounds.infrastructure.database import Base
from rounds.utils import now_in_app_naive_datetime

from ._types import generate_uuid


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    # ``metadata`` is reserved on declarative classes.
    metadata_text = Column("metadata", Text, nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", lazy="joined")


__all__ = ["NotificationModel"]
