"""Repository tests against an in-memory SQLite database."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from rounds.application.services import MentionService
from rounds.domain.entities import (
    CommentMention,
    DrinkingSession,
    Notification,
    SessionComment,
    User,
)
from rounds.infrastructure.repositories import (
    CommentMentionRepository,
    DrinkingSessionRepository,
    NotificationRepository,
    SessionCommentRepository,
    UserRepository,
)


def _create_user(db_session, username: str) -> User:
    return UserRepository(db_session).create(
        User(
            id=None,
            username=username,
            email=f"{username}@example.com",
            password="hashed",
            first_name=None,
            last_name=None,
            created_at=None,
        )
    )


@pytest.fixture()
def comment(db_session):
    author = _create_user(db_session, "author")
    drinking_session = DrinkingSessionRepository(db_session).create(
        DrinkingSession(
            id=None,
            name="Friday rounds",
            description=None,
            starts_at=None,
            ends_at=None,
            created_by_id=author.id,
            created_at=None,
        )
    )
    return SessionCommentRepository(db_session).create(
        SessionComment(
            id=None,
            session_id=drinking_session.id,
            user_id=author.id,
            content="@bob @carol cheers",
            created_by_id=author.id,
            created_at=None,
        )
    )


def _mention(comment_id: str, user_id: str, start: int, length: int) -> CommentMention:
    return CommentMention(
        id=None,
        comment_id=comment_id,
        mentioned_user_id=user_id,
        start_position=start,
        length=length,
    )


def test_user_lookup_by_username_and_login(db_session):
    created = _create_user(db_session, "bob")
    repository = UserRepository(db_session)

    assert repository.get_by_username("bob").id == created.id
    assert repository.get_by_login("bob@example.com").id == created.id
    assert repository.get_by_username("nobody") is None


def test_create_many_stores_the_whole_batch(db_session, comment):
    bob = _create_user(db_session, "bob")
    carol = _create_user(db_session, "carol")
    repository = CommentMentionRepository(db_session)

    saved = repository.create_many(
        [_mention(comment.id, bob.id, 0, 4), _mention(comment.id, carol.id, 5, 6)]
    )

    assert all(mention.id for mention in saved)
    assert [m.mentioned_username for m in repository.list_for_comment(comment.id)] == [
        "bob",
        "carol",
    ]
    assert [m.comment_id for m in repository.list_for_user(bob.id)] == [comment.id]


def test_create_many_is_all_or_nothing(db_session, comment):
    bob = _create_user(db_session, "bob")
    repository = CommentMentionRepository(db_session)

    with pytest.raises(IntegrityError):
        repository.create_many(
            [_mention(comment.id, bob.id, 0, 4), _mention(comment.id, "missing", 5, 6)]
        )

    assert repository.list_for_comment(comment.id) == []


def test_create_many_with_empty_batch_is_a_no_op(db_session):
    assert CommentMentionRepository(db_session).create_many([]) == []


def test_deleting_a_comment_removes_its_mentions(db_session, comment):
    bob = _create_user(db_session, "bob")
    mentions = CommentMentionRepository(db_session)
    mentions.create_many([_mention(comment.id, bob.id, 0, 4)])

    assert SessionCommentRepository(db_session).delete(comment.id) is True

    assert mentions.list_for_user(bob.id) == []
    assert SessionCommentRepository(db_session).get(comment.id) is None


def test_comment_is_loaded_with_its_mentions(db_session, comment):
    bob = _create_user(db_session, "bob")
    CommentMentionRepository(db_session).create_many([_mention(comment.id, bob.id, 0, 4)])

    loaded = SessionCommentRepository(db_session).get(comment.id)

    assert [m.mentioned_user_id for m in loaded.mentions] == [bob.id]


class RejectingMentionRepository(CommentMentionRepository):
    """Mention repository whose batch insert always fails."""

    def create_many(self, mentions):
        raise IntegrityError("INSERT", {}, Exception("constraint"))


def test_replace_swaps_the_stored_mentions(db_session, comment):
    bob = _create_user(db_session, "bob")
    carol = _create_user(db_session, "carol")
    mentions = CommentMentionRepository(db_session)
    mentions.create_many([_mention(comment.id, bob.id, 0, 4)])
    service = MentionService(mentions, UserRepository(db_session))

    saved = service.replace_for_comment(comment.id, "only @carol", "author")

    assert [m.mentioned_user_id for m in saved] == [carol.id]
    assert [m.mentioned_user_id for m in mentions.list_for_comment(comment.id)] == [carol.id]


def test_failed_replace_keeps_previous_mentions_and_text(db_session, comment):
    bob = _create_user(db_session, "bob")
    CommentMentionRepository(db_session).create_many([_mention(comment.id, bob.id, 0, 4)])
    comments = SessionCommentRepository(db_session)
    rejecting = RejectingMentionRepository(db_session)
    service = MentionService(rejecting, UserRepository(db_session))

    edited = comments.get(comment.id)
    edited.content = "hello again @bob"
    comments.update(edited, commit=False)
    with pytest.raises(IntegrityError):
        service.replace_for_comment(comment.id, edited.content, "author")

    assert [m.mentioned_user_id for m in rejecting.list_for_comment(comment.id)] == [bob.id]
    assert comments.get(comment.id).content == "@bob @carol cheers"


def test_failed_insert_inside_replace_rolls_back_the_delete(db_session, comment):
    bob = _create_user(db_session, "bob")
    mentions = CommentMentionRepository(db_session)
    mentions.create_many([_mention(comment.id, bob.id, 0, 4)])

    with pytest.raises(IntegrityError):
        mentions.replace_for_comment(comment.id, [_mention(comment.id, "missing", 0, 4)])

    assert [m.mentioned_user_id for m in mentions.list_for_comment(comment.id)] == [bob.id]


def test_update_commits_by_default(db_session, comment):
    comments = SessionCommentRepository(db_session)
    edited = comments.get(comment.id)
    edited.content = "changed"

    comments.update(edited)
    db_session.rollback()

    assert comments.get(comment.id).content == "changed"


def _notification(user_id: str, title: str = "Hello") -> Notification:
    return Notification(
        id=None,
        user_id=user_id,
        type="invite",
        title=title,
        message="Join the session",
        metadata='{"session_id": "s-1"}',
    )


def test_notification_read_flags(db_session):
    bob = _create_user(db_session, "bob")
    carol = _create_user(db_session, "carol")
    repository = NotificationRepository(db_session)
    first = repository.create(_notification(bob.id, "first"))
    second = repository.create(_notification(bob.id, "second"))
    other = repository.create(_notification(carol.id))

    assert first.read is False
    assert first.metadata == '{"session_id": "s-1"}'
    assert len(repository.list_unread_for_user(bob.id)) == 2

    assert repository.mark_as_read(first.id) is True
    assert [n.id for n in repository.list_unread_for_user(bob.id)] == [second.id]

    assert repository.mark_many_as_read([second.id, other.id], user_id=bob.id) == 1
    assert repository.get(other.id).read is False

    assert repository.mark_all_as_read(carol.id) == 1
    assert repository.list_unread_for_user(carol.id) == []
    assert len(repository.list_for_user(bob.id)) == 2


def test_notification_delete(db_session):
    bob = _create_user(db_session, "bob")
    repository = NotificationRepository(db_session)
    created = repository.create(_notification(bob.id))

    assert repository.delete(created.id) is True
    assert repository.get(created.id) is None
    assert repository.delete(created.id) is False
    assert repository.mark_as_read(created.id) is False
