from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import Notification, User
from app.repositories.notification_repo import NotificationRepository
from app.schemas.notification import NotificationRead, UnreadCount
from app.deps.auth import ensure_owner, get_current_user
from app.settings import get_settings

router = APIRouter(prefix="/notifications", tags=["notifications"])

def _get_own(repo: NotificationRepository, notification_id: str, current: User) -> Notification:
    n = repo.get(notification_id)
    if not n:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    ensure_owner(n.user_id, current, "notification")
    return n

@router.get("", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int | None = Query(None, ge=1, le=200),
):
    return NotificationRepository(db).get_by_user(current.id, limit=limit or get_settings().NOTIFICATION_LIMIT)

@router.get("/unread-count", response_model=UnreadCount)
def unread_count(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return UnreadCount(count=NotificationRepository(db).get_unread_count(current.id))

@router.post("/read-all", response_model=UnreadCount)
def mark_all_read(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    """Bulk read when the notification panel opens; returns how many flipped."""
    return UnreadCount(count=NotificationRepository(db).mark_all_as_read(current.id))

@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_read(notification_id: str, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = NotificationRepository(db)
    _get_own(repo, notification_id, current)
    repo.mark_as_read(notification_id)

@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: str, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = NotificationRepository(db)
    _get_own(repo, notification_id, current)
    repo.delete(notification_id)
