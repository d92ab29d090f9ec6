"""Application services shared by routes and use cases."""

from .mention_service import MENTION_PATTERN, MentionService, parse_mentions
from .notification_service import DeliveryFailure, NotificationService

__all__ = [
    "DeliveryFailure",
    "MENTION_PATTERN",
    "MentionService",
    "NotificationService",
    "parse_mentions",
]
