from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edupath.db.models import Notification
from edupath.services.realtime import ConnectionRegistry
from edupath.utils.errors import DatabaseError
from edupath.utils.logging import get_logger

logger = get_logger()

NOTIFICATION_KIND = "NOTIFICATION"

NO_CHANNEL = "NO_CHANNEL"
CHANNEL_CLOSED = "CHANNEL_CLOSED"
SEND_FAILED = "SEND_FAILED"


@dataclass(frozen=True)
class DispatchOutcome:
    """What happened to one notification: always persisted, maybe delivered"""

    notification_id: int
    user_id: int
    message: str
    persisted: bool = True
    delivered: bool = False
    delivery_error: Optional[str] = None


def build_payload(message: str) -> dict:
    return {"kind": NOTIFICATION_KIND, "message": message}


class NotificationDispatcher:
    """
    Persists a notification for a user, then pushes it over their live channel.

    The row is committed before any delivery attempt, so a client polling
    later sees every message even if it was offline at dispatch time. The
    commit also flushes whatever the caller staged on the same session (e.g.
    a status change), keeping the two writes together.

    Delivery is best effort: a missing or closed channel, or a failing send,
    is logged and reported in the outcome but never raised.
    """

    def __init__(self, db_session: Session, registry: ConnectionRegistry):
        self.db = db_session
        self.registry = registry

    async def notify(self, user_id: int, message: str) -> DispatchOutcome:
        notification = await self._persist(user_id, message)

        delivery_error = await self._deliver(user_id, message)
        outcome = DispatchOutcome(
            notification_id=notification.id,
            user_id=user_id,
            message=message,
            delivered=delivery_error is None,
            delivery_error=delivery_error,
        )

        if outcome.delivered:
            logger.info(
                f"Notification {notification.id} delivered live to user {user_id}"
            )
        else:
            logger.info(
                f"Notification {notification.id} stored for user {user_id}, "
                f"live delivery skipped ({delivery_error})"
            )
        return outcome

    async def _persist(self, user_id: int, message: str) -> Notification:
        notification = Notification(user_id=user_id, message=message, is_read=False)
        try:
            self.db.add(notification)
            self.db.commit()
            self.db.refresh(notification)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Failed to persist notification for user {user_id}: {str(e)}"
            )
            raise DatabaseError(
                "Failed to persist notification", "NOTIFICATION_PERSIST_FAILED"
            )
        return notification

    async def _deliver(self, user_id: int, message: str) -> Optional[str]:
        channel = self.registry.lookup(user_id)
        if channel is None:
            return NO_CHANNEL

        if not channel.is_open():
            logger.debug(f"Channel for user {user_id} is no longer open")
            return CHANNEL_CLOSED

        try:
            await channel.send(build_payload(message))
        except Exception as e:
            logger.warning(f"Live push to user {user_id} failed: {str(e)}")
            return SEND_FAILED

        return None
