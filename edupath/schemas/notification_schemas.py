from datetime import datetime
from pydantic import Field

from edupath.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class NotificationItem(BaseModel):
    id: int = Field(..., description="Notification ID")
    user_id: int = Field(..., description="Recipient user ID")
    message: str = Field(..., description="Notification text")
    is_read: bool = Field(..., description="Whether notification has been read")
    created_at: datetime = Field(..., description="Creation timestamp")


class MarkAllReadResponse(BaseModel):
    all_as_read_count: int = Field(
        0, description="Count of notifications marked as read at the same time"
    )
    unread_count: int = Field(0, description="Unread notifications left")
