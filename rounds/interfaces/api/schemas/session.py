"""Pydantic models describing drinking sessions."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class DrinkingSessionCreate(BaseModel):
    """Payload used to create a drinking session."""

    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None

    @model_validator(mode="after")
    def _check_window(self) -> "DrinkingSessionCreate":
        if self.starts_at and self.ends_at and self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be earlier than starts_at")
        return self


class DrinkingSessionRead(BaseModel):
    id: str
    name: str
    description: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    created_by_id: str
    created_at: datetime | None = None


__all__ = ["DrinkingSessionCreate", "DrinkingSessionRead"]
