"""Pydantic models for registration and authentication."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """Payload used to create an account."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^\w+$")
    email: str = Field(..., min_length=3, max_length=120, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str | None = Field(default=None, max_length=80)
    last_name: str | None = Field(default=None, max_length=80)


class UserRead(BaseModel):
    """Public representation of a user."""

    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class Token(BaseModel):
    """Bearer token issued after a successful login."""

    access_token: str
    token_type: str = "bearer"
    user_id: str


__all__ = ["Token", "UserRead", "UserRegister"]
