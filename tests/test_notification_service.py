"""Tests for creating and fanning out notifications."""

from __future__ import annotations

import json
import threading

import pytest
from sqlalchemy.exc import OperationalError

from fakes import FakeNotificationRepository, RecordingConnection
from rounds.application.services import NotificationService
from rounds.domain.entities import Notification
from rounds.infrastructure.notifications import (
    RECEIVE_NOTIFICATION_EVENT,
    ConnectionGroupRegistry,
)

pytestmark = pytest.mark.anyio


class BrokenRegistry(ConnectionGroupRegistry):
    """Registry whose delivery raises for the given groups."""

    def __init__(self, broken_groups=()) -> None:
        super().__init__()
        self.broken_groups = set(broken_groups)
        self.calls: list[str] = []

    async def send_to_group(self, group_key, event_name, payload):
        self.calls.append(group_key)
        if group_key in self.broken_groups:
            raise RuntimeError(f"transport down for {group_key}")
        return await super().send_to_group(group_key, event_name, payload)


def _notification(user_id: str = "u1") -> Notification:
    return Notification(
        id="n-1", user_id=user_id, type="invite", title="Invite", message="Join us"
    )


async def test_create_and_send_persists_then_delivers():
    repository = FakeNotificationRepository()
    registry = ConnectionGroupRegistry()
    connection = RecordingConnection()
    await registry.add_connection_to_group("c1", "u1", connection)
    service = NotificationService(repository, registry)

    saved = await service.create_and_send(
        "u1", "mention", "Hi", "You were mentioned", {"comment_id": "c-9"}
    )

    assert saved.read is False
    assert saved.id
    assert saved.created_at is not None
    assert json.loads(saved.metadata) == {"comment_id": "c-9"}
    assert repository.created == [saved]
    (message,) = connection.messages
    assert message["type"] == RECEIVE_NOTIFICATION_EVENT
    assert message["data"]["id"] == saved.id
    assert message["data"]["read"] is False


async def test_create_and_send_keeps_record_when_delivery_fails():
    repository = FakeNotificationRepository()
    service = NotificationService(repository, BrokenRegistry(broken_groups=["u1"]))

    saved = await service.create_and_send("u1", "invite", "Title", "Body")

    assert saved.read is False
    assert saved.id
    assert repository.created == [saved]


async def test_create_and_send_for_offline_user_still_stores():
    repository = FakeNotificationRepository()
    service = NotificationService(repository, ConnectionGroupRegistry())

    saved = await service.create_and_send("offline", "invite", "Title", "Body", "raw")

    assert saved.metadata == "raw"
    assert repository.created == [saved]


async def test_persistence_failure_skips_delivery():
    registry = BrokenRegistry()
    error = OperationalError("INSERT", {}, Exception("db down"))
    service = NotificationService(FakeNotificationRepository(error=error), registry)

    with pytest.raises(OperationalError):
        await service.create_and_send("u1", "invite", "Title", "Body")

    assert registry.calls == []


async def test_generated_identifiers_are_unique():
    service = NotificationService(FakeNotificationRepository(), ConnectionGroupRegistry())

    first = await service.create_and_send("u1", "t", "a", "b")
    second = await service.create_and_send("u1", "t", "a", "b")

    assert first.id != second.id


async def test_send_to_many_isolates_a_failing_recipient():
    registry = BrokenRegistry(broken_groups=["u2"])
    first, third = RecordingConnection(), RecordingConnection()
    await registry.add_connection_to_group("c1", "u1", first)
    await registry.add_connection_to_group("c3", "u3", third)
    service = NotificationService(FakeNotificationRepository(), registry)

    failures = await service.send_to_many(["u1", "u2", "u3"], _notification())

    assert len(first.messages) == 1
    assert len(third.messages) == 1
    assert [failure.user_id for failure in failures] == ["u2"]
    assert isinstance(failures[0].error, RuntimeError)
    assert sorted(registry.calls) == ["u1", "u2", "u3"]


async def test_send_to_many_reports_no_failures_on_success():
    registry = ConnectionGroupRegistry()
    connection = RecordingConnection()
    await registry.add_connection_to_group("c1", "u1", connection)
    service = NotificationService(FakeNotificationRepository(), registry)

    failures = await service.send_to_many(["u1", "u1", "offline"], _notification())

    assert failures == []
    assert len(connection.messages) == 1


async def test_send_reaches_every_connection_of_the_user():
    registry = ConnectionGroupRegistry()
    phone, laptop = RecordingConnection(), RecordingConnection()
    await registry.add_connection_to_group("phone", "u1", phone)
    await registry.add_connection_to_group("laptop", "u1", laptop)
    service = NotificationService(FakeNotificationRepository(), registry)

    delivered = await service.send("u1", _notification())

    assert delivered == 2
    assert phone.messages == laptop.messages


class ThreadRecordingRepository(FakeNotificationRepository):
    def __init__(self) -> None:
        super().__init__()
        self.threads: list[int] = []

    def create(self, notification: Notification) -> Notification:
        self.threads.append(threading.get_ident())
        return super().create(notification)


async def test_persistence_runs_off_the_event_loop_thread():
    repository = ThreadRecordingRepository()
    service = NotificationService(repository, ConnectionGroupRegistry())

    await service.create_and_send("u1", "invite", "Title", "Body")

    assert repository.threads
    assert repository.threads[0] != threading.get_ident()
