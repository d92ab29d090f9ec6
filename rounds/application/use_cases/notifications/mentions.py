"""Notify users that they were mentioned in a session comment."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rounds.application.services import NotificationService
from rounds.domain.entities import CommentMention, Notification, SessionComment, User

MENTION_NOTIFICATION_TYPE = "mention"


async def notify_mentioned_users(
    notification_service: NotificationService,
    *,
    comment: SessionComment,
    author: User,
    mentions: Sequence[CommentMention],
    skip_user_ids: Iterable[str] = (),
) -> list[Notification]:
    """Send one ``mention`` notification per distinct mentioned user.

    The author is never notified about mentioning themselves, nor is anyone in
    ``skip_user_ids``.
    """

    skipped = {author.id, *skip_user_ids}
    recipients = [
        user_id
        for user_id in dict.fromkeys(m.mentioned_user_id for m in mentions)
        if user_id not in skipped
    ]

    sent: list[Notification] = []
    for user_id in recipients:
        notification = await notification_service.create_and_send(
            user_id,
            MENTION_NOTIFICATION_TYPE,
            "You were mentioned",
            f"{author.username} mentioned you in a comment",
            {
                "comment_id": comment.id,
                "session_id": comment.session_id,
                "author_id": author.id,
            },
        )
        sent.append(notification)
    return sent


__all__ = ["MENTION_NOTIFICATION_TYPE", "notify_mentioned_users"]
