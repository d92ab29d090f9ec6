"""Tests for the connection-group registry."""

from __future__ import annotations

import anyio
import pytest

from fakes import RecordingConnection
from rounds.infrastructure.notifications import ConnectionGroupRegistry

pytestmark = pytest.mark.anyio


async def test_broadcast_reaches_both_connections_until_one_detaches():
    registry = ConnectionGroupRegistry()
    first, second = RecordingConnection(), RecordingConnection()
    await registry.add_connection_to_group("c1", "42", first)
    await registry.add_connection_to_group("c2", "42", second)

    assert await registry.send_to_group("42", "ReceiveNotification", {"n": 1}) == 2
    assert await registry.remove_connection_from_group("c1", "42") is True
    assert await registry.send_to_group("42", "ReceiveNotification", {"n": 2}) == 1

    assert first.messages == [{"type": "ReceiveNotification", "data": {"n": 1}}]
    assert second.messages == [
        {"type": "ReceiveNotification", "data": {"n": 1}},
        {"type": "ReceiveNotification", "data": {"n": 2}},
    ]


async def test_send_to_unknown_group_is_a_no_op():
    registry = ConnectionGroupRegistry()

    assert await registry.send_to_group("nobody", "ReceiveNotification", {}) == 0


async def test_groups_are_isolated():
    registry = ConnectionGroupRegistry()
    alice, bob = RecordingConnection(), RecordingConnection()
    await registry.add_connection_to_group("a", "alice", alice)
    await registry.add_connection_to_group("b", "bob", bob)

    await registry.send_to_group("alice", "ReceiveNotification", "hi")

    assert len(alice.messages) == 1
    assert bob.messages == []


async def test_failing_connection_is_detached_and_others_still_receive():
    registry = ConnectionGroupRegistry()
    dead, alive = RecordingConnection(fail=True), RecordingConnection()
    await registry.add_connection_to_group("dead", "7", dead)
    await registry.add_connection_to_group("alive", "7", alive)

    assert await registry.send_to_group("7", "ReceiveNotification", {}) == 1
    assert await registry.connection_count("7") == 1
    assert len(alive.messages) == 1


async def test_removing_last_connection_drops_the_group():
    registry = ConnectionGroupRegistry()
    await registry.add_connection_to_group("c1", "7", RecordingConnection())

    await registry.remove_connection_from_group("c1", "7")

    assert await registry.groups() == []
    assert await registry.remove_connection_from_group("c1", "7") is False


async def test_concurrent_attach_and_detach_keep_the_group_consistent():
    registry = ConnectionGroupRegistry()

    async def churn(index: int) -> None:
        connection_id = f"c{index}"
        await registry.add_connection_to_group(connection_id, "u", RecordingConnection())
        await anyio.sleep(0)
        if index % 2:
            await registry.remove_connection_from_group(connection_id, "u")

    async with anyio.create_task_group() as task_group:
        for index in range(50):
            task_group.start_soon(churn, index)

    assert await registry.connection_count("u") == 25
    assert await registry.send_to_group("u", "ReceiveNotification", {}) == 25
