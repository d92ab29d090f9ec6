"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: str | None
    username: str
    email: str
    password: str
    first_name: str | None
    last_name: str | None
    created_at: datetime | None
    last_login_at: datetime | None = None
    is_active: bool = True


__all__ = ["User"]
