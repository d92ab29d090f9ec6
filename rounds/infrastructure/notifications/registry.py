"""Connection registry that groups live websocket connections by user."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class RealtimeConnection(Protocol):
    """Anything able to push a JSON document to a connected client."""

    async def send_json(self, data: Any) -> None: ...


class ConnectionGroupRegistry:
    """Track which live connections belong to which group.

    A group key is the stringified user identifier, so addressing a group
    reaches every connection that user currently holds. All reads and writes of
    the mapping happen under one lock; deliveries work on a snapshot taken
    under that lock and never hold it while awaiting the network.
    """

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, RealtimeConnection]] = {}
        self._lock = asyncio.Lock()

    async def add_connection_to_group(
        self, connection_id: str, group_key: str, connection: RealtimeConnection
    ) -> None:
        """Attach ``connection`` to ``group_key`` under ``connection_id``."""

        async with self._lock:
            self._groups.setdefault(group_key, {})[connection_id] = connection
        logger.debug("Connection %s joined group %s", connection_id, group_key)

    async def remove_connection_from_group(
        self, connection_id: str, group_key: str
    ) -> bool:
        """Detach ``connection_id`` from ``group_key``; return whether it was there."""

        async with self._lock:
            return self._discard(connection_id, group_key)

    async def send_to_group(
        self, group_key: str, event_name: str, payload: Any
    ) -> int:
        """Send ``payload`` as ``event_name`` to every connection in ``group_key``.

        Returns the number of connections that accepted the message. A
        connection that fails is detached; the others still receive it.
        """

        async with self._lock:
            targets = list(self._groups.get(group_key, {}).items())

        if not targets:
            return 0

        message = {"type": event_name, "data": payload}
        delivered = 0
        stale: list[str] = []
        for connection_id, connection in targets:
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping connection %s of group %s after a failed send",
                    connection_id,
                    group_key,
                    exc_info=True,
                )
                stale.append(connection_id)
            else:
                delivered += 1

        if stale:
            async with self._lock:
                for connection_id in stale:
                    self._discard(connection_id, group_key)
        return delivered

    async def connection_count(self, group_key: str) -> int:
        async with self._lock:
            return len(self._groups.get(group_key, {}))

    async def groups(self) -> list[str]:
        async with self._lock:
            return sorted(self._groups)

    def _discard(self, connection_id: str, group_key: str) -> bool:
        connections = self._groups.get(group_key)
        if connections is None or connection_id not in connections:
            return False
        del connections[connection_id]
        if not connections:
            self._groups.pop(group_key, None)
        return True


__all__ = ["ConnectionGroupRegistry", "RealtimeConnection"]
