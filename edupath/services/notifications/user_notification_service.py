from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select, update, func, desc
from sqlalchemy.orm import Session

from edupath.config.settings import settings
from edupath.db.models import Notification
from edupath.db.session import get_sync_session
from edupath.schemas.notification_schemas import NotificationItem
from edupath.utils.logging import get_logger

logger = get_logger()


class UserNotificationService:
    """Service for retrieving and managing a user's stored notifications"""

    def __init__(self, db_session: Session):
        self.db = db_session

    async def get_user_notifications(
        self, user_id: int, limit: Optional[int] = None
    ) -> List[NotificationItem]:
        """
        Get the most recent notifications for a user, newest first.

        Args:
            user_id: The recipient's ID
            limit: Page size cap, defaults to NOTIFICATION_PAGE_SIZE

        Returns:
            List of notifications ordered by creation time descending
        """
        limit = limit or settings.NOTIFICATION_PAGE_SIZE
        result = self.db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(desc(Notification.created_at), desc(Notification.id))
            .limit(limit)
        )
        notifications = [
            NotificationItem.model_validate(n) for n in result.scalars().all()
        ]

        logger.info(f"Retrieved {len(notifications)} notifications for user {user_id}")
        return notifications

    async def get_unread_count(self, user_id: int) -> int:
        result = self.db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
        )
        return result.scalar() or 0

    async def mark_all_as_read(self, user_id: int) -> int:
        """Mark every unread notification of a user as read; returns the count"""
        result = self.db.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
            .values(is_read=True)
        )
        self.db.commit()

        updated_count = result.rowcount or 0
        logger.info(f"Marked {updated_count} notifications as read for user {user_id}")
        return updated_count


def get_user_notification_service(
    db_session: Session = Depends(get_sync_session),
) -> UserNotificationService:
    """Dependency function to get UserNotificationService instance"""
    return UserNotificationService(db_session)
