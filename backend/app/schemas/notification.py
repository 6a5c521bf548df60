from datetime import datetime
from enum import Enum
from app.schemas.base import CamelModel

class NotificationType(str, Enum):
    like = "like"
    follow = "follow"
    comment = "comment"

class NotificationRead(CamelModel):
    id: str
    user_id: str
    from_user_id: str
    from_user_name: str
    from_user_avatar: str
    type: NotificationType
    post_id: str | None = None
    message: str
    is_read: bool
    created_at: datetime

class UnreadCount(CamelModel):
    count: int
