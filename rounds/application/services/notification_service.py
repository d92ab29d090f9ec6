"""Persist notifications and push them to the recipients' live connections."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import anyio
from anyio import to_thread

from rounds.domain.entities import Notification
from rounds.infrastructure.notifications import (
    RECEIVE_NOTIFICATION_EVENT,
    ConnectionGroupRegistry,
    serialize_notification,
)
from rounds.infrastructure.repositories import NotificationRepository
from rounds.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryFailure:
    """A recipient whose realtime delivery raised."""

    user_id: str
    error: Exception


class NotificationService:
    """Create notifications and deliver them through the connection registry."""

    def __init__(
        self,
        repository: NotificationRepository,
        registry: ConnectionGroupRegistry,
    ) -> None:
        self._repository = repository
        self._registry = registry

    async def create_and_send(
        self,
        user_id: str,
        notification_type: str,
        title: str,
        body: str,
        metadata: Mapping[str, Any] | str | None = None,
    ) -> Notification:
        """Store a new unread notification for ``user_id`` and push it.

        Storage happens first, in a worker thread, and its errors propagate.
        A failed push is logged and the stored notification is still returned.
        """

        notification = Notification(
            id=str(uuid4()),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=body,
            metadata=_encode_metadata(metadata),
            read=False,
            created_at=now_in_app_timezone(),
        )
        saved = await to_thread.run_sync(self._repository.create, notification)

        try:
            await self.send(user_id, saved)
        except Exception:
            logger.warning(
                "Realtime delivery of notification %s to user %s failed",
                saved.id,
                user_id,
                exc_info=True,
            )
        return saved

    async def send(self, user_id: str, notification: Notification) -> int:
        """Push ``notification`` to every live connection of ``user_id``."""

        return await self._registry.send_to_group(
            str(user_id),
            RECEIVE_NOTIFICATION_EVENT,
            serialize_notification(notification),
        )

    async def send_to_many(
        self, user_ids: Iterable[str], notification: Notification
    ) -> list[DeliveryFailure]:
        """Push ``notification`` to each recipient concurrently.

        Returns once every delivery has finished, with one entry per recipient
        whose delivery raised.
        """

        failures: list[DeliveryFailure] = []

        async def _deliver(user_id: str) -> None:
            try:
                await self.send(user_id, notification)
            except Exception as exc:
                logger.warning(
                    "Realtime delivery of notification %s to user %s failed",
                    notification.id,
                    user_id,
                    exc_info=True,
                )
                failures.append(DeliveryFailure(user_id=user_id, error=exc))

        async with anyio.create_task_group() as task_group:
            for user_id in dict.fromkeys(user_ids):
                task_group.start_soon(_deliver, user_id)

        return failures


def _encode_metadata(metadata: Mapping[str, Any] | str | None) -> str | None:
    if metadata is None or isinstance(metadata, str):
        return metadata
    return json.dumps(dict(metadata), default=str)


__all__ = ["DeliveryFailure", "NotificationService"]
