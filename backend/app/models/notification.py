from datetime import datetime
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Boolean, DateTime, Enum as SAEnum
from app.db import Base, new_id, utcnow

class NotificationType(str, Enum):
    like = "like"
    follow = "follow"
    comment = "comment"

class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    # recipient
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    from_user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    from_user_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    from_user_avatar: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[NotificationType] = mapped_column(
        SAEnum(NotificationType, name="notification_type"), nullable=False
    )
    post_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    message: Mapped[str] = mapped_column(String(255), nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
