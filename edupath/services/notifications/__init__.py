from .dispatcher import (
    NotificationDispatcher,
    DispatchOutcome,
    build_payload,
    NOTIFICATION_KIND,
    NO_CHANNEL,
    CHANNEL_CLOSED,
    SEND_FAILED,
)
from .user_notification_service import UserNotificationService

__all__ = [
    "NotificationDispatcher",
    "DispatchOutcome",
    "build_payload",
    "NOTIFICATION_KIND",
    "NO_CHANNEL",
    "CHANNEL_CLOSED",
    "SEND_FAILED",
    "UserNotificationService",
]
