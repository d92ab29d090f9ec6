"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, String

from rounds.infrastructure.database import Base
from rounds.utils import now_in_app_naive_datetime

from ._types import generate_uuid


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(80), nullable=True)
    last_name = Column(String(80), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    last_login_at = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


__all__ = ["UserModel"]
