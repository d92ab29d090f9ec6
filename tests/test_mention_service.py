"""Tests for resolving and persisting comment mentions."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from fakes import FakeMentionRepository, FakeUserRepository, make_user
from rounds.application.services import MentionService


def _service(users=(), failing=(), error=None):
    mention_repository = FakeMentionRepository(error=error)
    user_repository = FakeUserRepository(users, failing=failing)
    return MentionService(mention_repository, user_repository), mention_repository, user_repository


def test_only_resolvable_usernames_are_persisted():
    bob = make_user("bob")
    service, mentions, _ = _service(users=[bob])

    saved = service.resolve_and_persist("comment-1", "hi @bob and @ghost", "id-alice")

    assert len(saved) == 1
    assert saved[0].mentioned_user_id == bob.id
    assert saved[0].comment_id == "comment-1"
    assert (saved[0].start_position, saved[0].length) == (3, 4)
    assert saved[0].id
    assert mentions.batches == [saved]


def test_duplicate_mentions_are_each_persisted_in_one_batch():
    service, mentions, users = _service(users=[make_user("bob")])

    saved = service.resolve_and_persist("c", "@bob @bob", "author")

    assert [m.start_position for m in saved] == [0, 5]
    assert len(mentions.batches) == 1
    assert users.lookups == ["bob"]


def test_no_batch_write_when_nothing_resolves():
    service, mentions, _ = _service()

    assert service.resolve_and_persist("c", "@nobody here", "author") == []
    assert service.resolve_and_persist("c", "", "author") == []
    assert mentions.batches == []


def test_failed_lookup_drops_only_that_token():
    service, _, _ = _service(users=[make_user("bob")], failing=["flaky"])

    saved = service.resolve_and_persist("c", "@flaky @bob", "author")

    assert [m.mentioned_username for m in saved] == ["bob"]


def test_batch_failure_propagates():
    error = IntegrityError("INSERT", {}, Exception("constraint"))
    service, _, _ = _service(users=[make_user("bob")], error=error)

    with pytest.raises(IntegrityError):
        service.resolve_and_persist("c", "@bob", "author")


def test_persisted_mentions_fit_inside_the_content():
    content = "cheers @bob"
    service, _, _ = _service(users=[make_user("bob")])

    (mention,) = service.resolve_and_persist("c", content, "author")

    assert mention.start_position >= 0
    assert mention.length > 0
    assert mention.start_position + mention.length <= len(content)


def test_replace_for_comment_hands_the_new_batch_to_one_swap():
    service, mentions, _ = _service(users=[make_user("bob")])

    saved = service.replace_for_comment("c", "now @bob and @ghost", "author")

    assert [m.mentioned_username for m in saved] == ["bob"]
    assert mentions.replaced == {"c": saved}
    assert mentions.batches == []


def test_replace_for_comment_swaps_to_nothing_when_no_mention_resolves():
    service, mentions, _ = _service()

    assert service.replace_for_comment("c", "no mentions left", "author") == []
    assert mentions.replaced == {"c": []}


def test_replace_for_comment_propagates_storage_failure():
    error = IntegrityError("INSERT", {}, Exception("constraint"))
    service, _, _ = _service(users=[make_user("bob")], error=error)

    with pytest.raises(IntegrityError):
        service.replace_for_comment("c", "@bob", "author")
