"""Persistence helpers for session comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session, selectinload

from rounds.domain.entities import SessionComment
from rounds.infrastructure.models import SessionCommentModel
from rounds.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .comment_mention_repository import CommentMentionRepository


class SessionCommentRepository:
    """Provide CRUD operations for :class:`SessionComment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: str) -> SessionComment | None:
        model = self._get_model(comment_id)
        return self._to_entity(model) if model else None

    def list_for_session(self, session_id: str) -> Sequence[SessionComment]:
        query = (
            self.session.query(SessionCommentModel)
            .options(selectinload(SessionCommentModel.mentions))
            .filter(SessionCommentModel.session_id == session_id)
            .order_by(SessionCommentModel.created_at.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, comment: SessionComment) -> SessionComment:
        model = SessionCommentModel(
            session_id=comment.session_id,
            user_id=comment.user_id,
            content=comment.content,
            created_by_id=comment.created_by_id,
            created_at=ensure_app_naive_datetime(
                comment.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, comment: SessionComment, *, commit: bool = True) -> SessionComment:
        """Write the editable fields of ``comment``.

        With ``commit=False`` the change is only flushed, so a later commit on
        the same session (for example the mention swap) makes it durable.
        """

        if comment.id is None:
            raise ValueError("Comment id is required for updates")
        model = self._get_model(comment.id)
        if model is None:
            msg = f"Comment with id {comment.id} not found"
            raise ValueError(msg)
        model.content = comment.content
        model.updated_by_id = comment.updated_by_id
        model.updated_at = ensure_app_naive_datetime(comment.updated_at)
        self.session.add(model)
        if not commit:
            self.session.flush()
            return self._to_entity(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, comment_id: str) -> bool:
        model = self._get_model(comment_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, comment_id: str) -> SessionCommentModel | None:
        return (
            self.session.query(SessionCommentModel)
            .options(selectinload(SessionCommentModel.mentions))
            .filter(SessionCommentModel.id == comment_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: SessionCommentModel) -> SessionComment:
        return SessionComment(
            id=model.id,
            session_id=model.session_id,
            user_id=model.user_id,
            content=model.content,
            created_by_id=model.created_by_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            updated_by_id=model.updated_by_id,
            mentions=[
                CommentMentionRepository._to_entity(mention)
                for mention in model.mentions
            ],
        )


__all__ = ["SessionCommentRepository"]
