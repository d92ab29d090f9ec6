"""Use case for editing a comment."""

from __future__ import annotations

from functools import partial

from anyio import to_thread
from sqlalchemy.orm import Session

from rounds.application.services import MentionService, NotificationService
from rounds.application.use_cases.notifications import notify_mentioned_users
from rounds.domain.entities import SessionComment, User
from rounds.infrastructure.repositories import SessionCommentRepository
from rounds.utils import now_in_app_timezone

from .errors import CommentNotFoundError, CommentPermissionError


def _apply_edit(
    session: Session,
    mention_service: MentionService,
    *,
    comment_id: str,
    editor: User,
    content: str,
) -> tuple[SessionComment, set[str]]:
    repository = SessionCommentRepository(session)
    comment = repository.get(comment_id)
    if comment is None:
        raise CommentNotFoundError(f"Comment {comment_id} not found")
    if comment.created_by_id != editor.id:
        raise CommentPermissionError("Only the author can edit this comment")

    previously_mentioned = {m.mentioned_user_id for m in comment.mentions}

    comment.content = content
    comment.updated_by_id = editor.id
    comment.updated_at = now_in_app_timezone()
    # The text change is committed together with the new mentions.
    updated = repository.update(comment, commit=False)
    updated.mentions = mention_service.replace_for_comment(
        updated.id, updated.content, editor.id
    )
    return updated, previously_mentioned


async def update_comment(
    session: Session,
    *,
    mention_service: MentionService,
    notification_service: NotificationService,
    comment_id: str,
    editor: User,
    content: str,
) -> SessionComment:
    """Replace the comment text and its mentions.

    Both are stored in one transaction; if the mentions cannot be written the
    comment keeps its previous text and mentions. Only users newly mentioned
    by the edit are notified.
    """

    updated, previously_mentioned = await to_thread.run_sync(
        partial(
            _apply_edit,
            session,
            mention_service,
            comment_id=comment_id,
            editor=editor,
            content=content,
        )
    )
    await notify_mentioned_users(
        notification_service,
        comment=updated,
        author=editor,
        mentions=updated.mentions,
        skip_user_ids=previously_mentioned,
    )
    return updated
