"""Use case for posting a comment on a drinking session."""

from __future__ import annotations

import logging
from functools import partial

from anyio import to_thread
from sqlalchemy.orm import Session

from rounds.application.services import MentionService, NotificationService
from rounds.application.use_cases.notifications import notify_mentioned_users
from rounds.domain.entities import SessionComment, User
from rounds.infrastructure.repositories import (
    DrinkingSessionRepository,
    SessionCommentRepository,
)
from rounds.utils import now_in_app_timezone

from .errors import SessionNotFoundError

logger = logging.getLogger(__name__)


def _store_comment(
    session: Session,
    mention_service: MentionService,
    *,
    session_id: str,
    author: User,
    content: str,
) -> SessionComment:
    if DrinkingSessionRepository(session).get(session_id) is None:
        raise SessionNotFoundError(f"Session {session_id} not found")

    comment = SessionCommentRepository(session).create(
        SessionComment(
            id=None,
            session_id=session_id,
            user_id=author.id,
            content=content,
            created_by_id=author.id,
            created_at=now_in_app_timezone(),
        )
    )
    comment.mentions = mention_service.resolve_and_persist(
        comment.id, comment.content, author.id
    )
    return comment


async def create_comment(
    session: Session,
    *,
    mention_service: MentionService,
    notification_service: NotificationService,
    session_id: str,
    author: User,
    content: str,
) -> SessionComment:
    """Store the comment, its mentions, and notify the mentioned users.

    Database work runs in a worker thread so the event loop keeps serving
    websocket traffic meanwhile.
    """

    comment = await to_thread.run_sync(
        partial(
            _store_comment,
            session,
            mention_service,
            session_id=session_id,
            author=author,
            content=content,
        )
    )
    await notify_mentioned_users(
        notification_service,
        comment=comment,
        author=author,
        mentions=comment.mentions,
    )
    logger.info(
        "User %s commented on session %s with %d mentions",
        author.id,
        session_id,
        len(comment.mentions),
    )
    return comment
