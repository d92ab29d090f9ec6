"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    """Payload used to create and push a notification."""

    user_id: str
    type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=120)
    message: str = Field(..., min_length=1)
    metadata: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: str
    title: str
    message: str
    metadata: str | None = None
    read: bool
    created_at: datetime


class MessageResponse(BaseModel):
    message: str


__all__ = ["MessageResponse", "NotificationCreate", "NotificationRead"]
