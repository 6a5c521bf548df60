"""Best-effort notification writes for likes, comments and follows.

A notification is a side effect of a primary action that has already been
committed. If writing it fails, the failure is logged, the session is rolled
back to a clean state and the caller carries on; nothing retries it.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Notification, NotificationType, User
from app.repositories.notification_repo import NotificationRepository
from app.services.events import StateEvent, StateEvents, Topic

log = logging.getLogger(__name__)

MESSAGES = {
    NotificationType.like: "liked your post",
    NotificationType.comment: "commented on your post",
    NotificationType.follow: "started following you",
}


class NotificationEmitter:
    def __init__(self, db: Session, events: StateEvents | None = None):
        self.db = db
        self.repo = NotificationRepository(db)
        self.events = events

    def emit(
        self,
        kind: NotificationType,
        *,
        actor: User,
        recipient_id: str,
        post_id: str | None = None,
    ) -> Notification | None:
        if not recipient_id or recipient_id == actor.id:
            return None
        try:
            notification = self.repo.create(
                user_id=recipient_id,
                from_user_id=actor.id,
                from_user_name=actor.display_name,
                from_user_avatar=actor.avatar,
                type=kind,
                post_id=post_id,
                message=MESSAGES[kind],
            )
        except SQLAlchemyError:
            self.db.rollback()
            log.exception("failed to write %s notification for user=%s post=%s", kind.value, recipient_id, post_id)
            return None

        if self.events is not None:
            self.events.publish(StateEvent(Topic.NOTIFICATIONS, recipient_id, post_id=post_id))
        return notification

    def like(self, *, actor: User, post_owner_id: str, post_id: str) -> Notification | None:
        return self.emit(NotificationType.like, actor=actor, recipient_id=post_owner_id, post_id=post_id)

    def comment(self, *, actor: User, post_owner_id: str, post_id: str) -> Notification | None:
        return self.emit(NotificationType.comment, actor=actor, recipient_id=post_owner_id, post_id=post_id)

    def follow(self, *, actor: User, followed_id: str) -> Notification | None:
        return self.emit(NotificationType.follow, actor=actor, recipient_id=followed_id)
