from typing import Annotated
from fastapi import APIRouter, Depends, Request, Query

from edupath.config.settings import settings
from edupath.services.notifications.user_notification_service import (
    UserNotificationService,
    get_user_notification_service,
)
from edupath.schemas.notification_schemas import MarkAllReadResponse
from edupath.middlewares.auth_middleware import get_current_user, AuthState
from edupath.utils.responses import ResponseBuilder
from edupath.utils.errors import DatabaseError
from edupath.utils.logging import get_logger

notifications_router = APIRouter()
logger = get_logger()


@notifications_router.get("")
async def get_notifications(
    request: Request,
    current_user: Annotated[AuthState, Depends(get_current_user)],
    service: UserNotificationService = Depends(get_user_notification_service),
    limit: int = Query(
        default=settings.NOTIFICATION_PAGE_SIZE,
        ge=1,
        le=settings.NOTIFICATION_PAGE_SIZE,
        description="Maximum number of notifications to return",
    ),
):
    """
    Get the current user's most recent notifications, newest first.

    Includes read and unread ones; the unread count covers the whole history.
    """
    notifications = await service.get_user_notifications(
        user_id=current_user.user_id, limit=limit
    )
    unread_count = await service.get_unread_count(current_user.user_id)

    return ResponseBuilder.success(
        request=request,
        data={
            "notifications": [n.model_dump(by_alias=True) for n in notifications],
            "unreadCount": unread_count,
            "limit": limit,
        },
        message=f"Retrieved {len(notifications)} notifications",
    )


@notifications_router.post("/read")
async def mark_all_notifications_as_read(
    request: Request,
    current_user: Annotated[AuthState, Depends(get_current_user)],
    service: UserNotificationService = Depends(get_user_notification_service),
):
    """
    Mark all unread notifications as read for the current user.

    This is a bulk operation; there is no per-notification variant.
    """
    try:
        updated_count = await service.mark_all_as_read(current_user.user_id)
    except DatabaseError:
        raise
    except Exception as e:
        logger.error(
            f"Failed to mark notifications as read for user {current_user.user_id}: {str(e)}"
        )
        raise DatabaseError(
            "Failed to mark notifications as read", "NOTIFICATION_UPDATE_FAILED"
        )

    response_data = MarkAllReadResponse(all_as_read_count=updated_count, unread_count=0)
    return ResponseBuilder.success(
        request=request,
        data=response_data.model_dump(by_alias=True),
        message=f"Marked {updated_count} notifications as read",
    )
