from __future__ import annotations

from sqlalchemy import select, func, update

from app.models import Notification, NotificationType
from app.repositories.base import BaseRepository

class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    def create(
        self,
        *,
        user_id: str,
        from_user_id: str,
        from_user_name: str,
        from_user_avatar: str,
        type: NotificationType,
        message: str,
        post_id: str | None = None,
    ) -> Notification:
        n = Notification(
            user_id=user_id,
            from_user_id=from_user_id,
            from_user_name=from_user_name,
            from_user_avatar=from_user_avatar,
            type=type,
            post_id=post_id,
            message=message,
            is_read=False,
        )
        return self.add_and_refresh(n)

    def get_by_user(self, user_id: str, *, limit: int = 50) -> list[Notification]:
        """Newest first, capped at limit."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_unread_count(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(Notification).where(
            Notification.user_id == user_id, Notification.is_read.is_(False)
        )
        return self.db.execute(stmt).scalar_one()

    def mark_as_read(self, notification_id: str) -> bool:
        n = self.get(notification_id)
        if not n:
            return False
        n.is_read = True
        self.db.commit()
        return True

    def mark_all_as_read(self, user_id: str) -> int:
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        self.db.commit()
        return result.rowcount or 0

    def delete(self, notification_id: str) -> bool:
        return self.delete_by_id(notification_id)
