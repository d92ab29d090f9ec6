"""Pydantic models describing session comments and their mentions."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Payload used to post a comment."""

    session_id: str
    content: str = Field(..., min_length=1, max_length=4000)


class CommentUpdate(BaseModel):
    """Payload used to edit a comment."""

    content: str = Field(..., min_length=1, max_length=4000)


class CommentMentionRead(BaseModel):
    """A resolved ``@username`` inside a comment."""

    id: str
    comment_id: str
    mentioned_user_id: str
    mentioned_username: str | None = None
    start_position: int
    length: int
    created_at: datetime | None = None


class CommentRead(BaseModel):
    """Representation of a comment returned to the client."""

    id: str
    session_id: str
    user_id: str
    content: str
    created_by_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    mentions: list[CommentMentionRead] = Field(default_factory=list)


__all__ = ["CommentCreate", "CommentMentionRead", "CommentRead", "CommentUpdate"]
