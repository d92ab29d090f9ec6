"""Attach and detach websocket clients to their user's connection group."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from fastapi import WebSocket

from .registry import ConnectionGroupRegistry

logger = logging.getLogger(__name__)


class NotificationHub:
    """Bridge between accepted websockets and the connection registry."""

    def __init__(self, registry: ConnectionGroupRegistry) -> None:
        self._registry = registry

    async def on_connected(
        self, websocket: WebSocket, user_id: str, *, greeting: Any = None
    ) -> str:
        """Accept ``websocket`` and join it to ``user_id``'s group.

        ``greeting`` is sent before the socket joins the group, so it always
        reaches the client ahead of any pushed notification.
        """

        await websocket.accept()
        if greeting is not None:
            await websocket.send_json(greeting)
        connection_id = uuid4().hex
        await self._registry.add_connection_to_group(connection_id, user_id, websocket)
        logger.info("User %s connected to notifications (%s)", user_id, connection_id)
        return connection_id

    async def on_disconnected(self, connection_id: str, user_id: str) -> None:
        """Remove the connection from ``user_id``'s group."""

        await self._registry.remove_connection_from_group(connection_id, user_id)
        logger.info(
            "User %s disconnected from notifications (%s)", user_id, connection_id
        )


__all__ = ["NotificationHub"]
