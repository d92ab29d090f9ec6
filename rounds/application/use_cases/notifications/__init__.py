"""Public helpers for emitting domain notifications."""

from .mentions import MENTION_NOTIFICATION_TYPE, notify_mentioned_users

__all__ = ["MENTION_NOTIFICATION_TYPE", "notify_mentioned_users"]
