"""Detect ``@username`` mentions in comment text and store the resolved ones."""

from __future__ import annotations

import logging
import re
from typing import Final

from sqlalchemy.exc import SQLAlchemyError

from rounds.domain.entities import CommentMention, MentionParseResult, User
from rounds.infrastructure.repositories import CommentMentionRepository, UserRepository
from rounds.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

MENTION_PATTERN: Final[re.Pattern[str]] = re.compile(r"@(\w+)")


def parse_mentions(content: str) -> list[MentionParseResult]:
    """Return every ``@<word characters>`` token of ``content`` in textual order.

    ``start_position`` points at the ``@`` and ``length`` covers the ``@`` plus
    the username. Repeated mentions are all reported.
    """

    if not content:
        return []
    return [
        MentionParseResult(
            username=match.group(1),
            start_position=match.start(),
            length=match.end() - match.start(),
        )
        for match in MENTION_PATTERN.finditer(content)
    ]


class MentionService:
    """Resolve parsed mentions to users and persist them as one batch."""

    def __init__(
        self,
        mention_repository: CommentMentionRepository,
        user_repository: UserRepository,
    ) -> None:
        self._mentions = mention_repository
        self._users = user_repository

    @staticmethod
    def parse(content: str) -> list[MentionParseResult]:
        return parse_mentions(content)

    def resolve_and_persist(
        self, comment_id: str, content: str, created_by_id: str
    ) -> list[CommentMention]:
        """Store a mention for every token that names an existing user.

        Tokens naming nobody are dropped without notice. Storage errors for the
        batch propagate to the caller.
        """

        mentions = self._resolve(comment_id, content)
        if not mentions:
            return []

        saved = self._mentions.create_many(mentions)
        logger.debug(
            "Stored %d mentions for comment %s written by %s",
            len(saved),
            comment_id,
            created_by_id,
        )
        return saved

    def replace_for_comment(
        self, comment_id: str, content: str, created_by_id: str
    ) -> list[CommentMention]:
        """Parse ``content`` again and swap the stored mentions of ``comment_id``.

        The old mentions are only gone once the new batch is stored; if storing
        fails they are kept and the error propagates.
        """

        mentions = self._resolve(comment_id, content)
        saved = self._mentions.replace_for_comment(comment_id, mentions)
        logger.debug(
            "Replaced mentions of comment %s edited by %s (%d now)",
            comment_id,
            created_by_id,
            len(saved),
        )
        return saved

    def _resolve(self, comment_id: str, content: str) -> list[CommentMention]:
        resolved: dict[str, User | None] = {}
        mentions: list[CommentMention] = []
        created_at = now_in_app_timezone()

        for result in parse_mentions(content):
            if result.username not in resolved:
                resolved[result.username] = self._lookup(result.username)
            user = resolved[result.username]
            if user is None:
                continue

            mention = CommentMention(
                id=None,
                comment_id=comment_id,
                mentioned_user_id=user.id,
                start_position=result.start_position,
                length=result.length,
                created_at=created_at,
                mentioned_username=user.username,
            )
            mention.validate_against(content)
            mentions.append(mention)
        return mentions

    def _lookup(self, username: str) -> User | None:
        try:
            return self._users.get_by_username(username)
        except SQLAlchemyError:
            logger.warning("Lookup for mentioned user %r failed", username, exc_info=True)
            return None


__all__ = ["MENTION_PATTERN", "MentionService", "parse_mentions"]
