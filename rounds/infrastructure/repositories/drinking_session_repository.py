"""Persistence helpers for drinking sessions."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from rounds.domain.entities import DrinkingSession
from rounds.infrastructure.models import DrinkingSessionModel
from rounds.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class DrinkingSessionRepository:
    """Provide CRUD operations for :class:`DrinkingSession` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, session_id: str) -> DrinkingSession | None:
        model = self.session.get(DrinkingSessionModel, session_id)
        return self._to_entity(model) if model else None

    def list_recent(self, *, limit: int = 50) -> Sequence[DrinkingSession]:
        query = (
            self.session.query(DrinkingSessionModel)
            .order_by(DrinkingSessionModel.created_at.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, drinking_session: DrinkingSession) -> DrinkingSession:
        model = DrinkingSessionModel(
            name=drinking_session.name,
            description=drinking_session.description,
            starts_at=ensure_app_naive_datetime(drinking_session.starts_at),
            ends_at=ensure_app_naive_datetime(drinking_session.ends_at),
            created_by_id=drinking_session.created_by_id,
            created_at=ensure_app_naive_datetime(
                drinking_session.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DrinkingSessionModel) -> DrinkingSession:
        return DrinkingSession(
            id=model.id,
            name=model.name,
            description=model.description,
            starts_at=ensure_app_timezone(model.starts_at),
            ends_at=ensure_app_timezone(model.ends_at),
            created_by_id=model.created_by_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["DrinkingSessionRepository"]
