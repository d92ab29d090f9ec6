"""SQLAlchemy model for drinking sessions."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from rounds.infrastructure.database import Base
from rounds.utils import now_in_app_naive_datetime

from ._types import generate_uuid


class DrinkingSessionModel(Base):
    """Database representation of a drinking session."""

    __tablename__ = "drinking_session"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    starts_at = Column(DateTime, nullable=True)
    ends_at = Column(DateTime, nullable=True)
    created_by_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True)

    comments = relationship(
        "SessionCommentModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["DrinkingSessionModel"]
