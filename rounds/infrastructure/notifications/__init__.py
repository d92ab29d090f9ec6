"""Realtime notification helpers for the infrastructure layer."""

from .hub import NotificationHub
from .registry import ConnectionGroupRegistry, RealtimeConnection
from .serialization import RECEIVE_NOTIFICATION_EVENT, serialize_notification

__all__ = [
    "ConnectionGroupRegistry",
    "NotificationHub",
    "RECEIVE_NOTIFICATION_EVENT",
    "RealtimeConnection",
    "serialize_notification",
]
