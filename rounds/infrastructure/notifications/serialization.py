"""Wire representation of notifications pushed to realtime clients."""

from __future__ import annotations

from typing import Any

from rounds.domain.entities import Notification

RECEIVE_NOTIFICATION_EVENT = "ReceiveNotification"


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON-serializable payload for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "metadata": notification.metadata,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["RECEIVE_NOTIFICATION_EVENT", "serialize_notification"]
