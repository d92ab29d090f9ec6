"""Persistence helpers for comment mentions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rounds.domain.entities import CommentMention
from rounds.infrastructure.models import CommentMentionModel
from rounds.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class CommentMentionRepository:
    """Store and query :class:`CommentMention` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, mention_id: str) -> CommentMention | None:
        model = self.session.get(CommentMentionModel, mention_id)
        return self._to_entity(model) if model else None

    def list_for_comment(self, comment_id: str) -> Sequence[CommentMention]:
        query = (
            self.session.query(CommentMentionModel)
            .filter(CommentMentionModel.comment_id == comment_id)
            .order_by(CommentMentionModel.start_position.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(
        self, user_id: str, *, limit: int | None = 50
    ) -> Sequence[CommentMention]:
        query = (
            self.session.query(CommentMentionModel)
            .filter(CommentMentionModel.mentioned_user_id == user_id)
            .order_by(CommentMentionModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create_many(self, mentions: Iterable[CommentMention]) -> list[CommentMention]:
        """Insert ``mentions`` in a single transaction and return them.

        On failure the transaction is rolled back and the error re-raised, so
        either the whole batch is stored or none of it is.
        """

        models = [self._to_model(mention) for mention in mentions]
        if not models:
            return []

        self.session.add_all(models)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to store a batch of %d mentions", len(models))
            raise

        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def replace_for_comment(
        self, comment_id: str, mentions: Iterable[CommentMention]
    ) -> list[CommentMention]:
        """Swap the stored mentions of ``comment_id`` for ``mentions``.

        The delete and the inserts share one transaction together with any
        pending change on the session (such as the edited comment text). A
        failure rolls all of it back and re-raises.
        """

        batch = list(mentions)
        try:
            (
                self.session.query(CommentMentionModel)
                .filter(CommentMentionModel.comment_id == comment_id)
                .delete(synchronize_session=False)
            )
            if not batch:
                self.session.commit()
                return []
            return self.create_many(batch)
        except SQLAlchemyError:
            self.session.rollback()
            raise

    @staticmethod
    def _to_model(mention: CommentMention) -> CommentMentionModel:
        model = CommentMentionModel(
            comment_id=mention.comment_id,
            mentioned_user_id=mention.mentioned_user_id,
            start_position=mention.start_position,
            length=mention.length,
            created_at=ensure_app_naive_datetime(
                mention.created_at or now_in_app_timezone()
            ),
        )
        if mention.id is not None:
            model.id = mention.id
        return model

    @staticmethod
    def _to_entity(model: CommentMentionModel) -> CommentMention:
        return CommentMention(
            id=model.id,
            comment_id=model.comment_id,
            mentioned_user_id=model.mentioned_user_id,
            start_position=model.start_position,
            length=model.length,
            created_at=ensure_app_timezone(model.created_at),
            mentioned_username=(
                model.mentioned_user.username if model.mentioned_user else None
            ),
        )


__all__ = ["CommentMentionRepository"]
