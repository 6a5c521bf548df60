from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import User
from app.repositories.like_repo import LikeRepository
from app.repositories.post_repo import PostRepository
from app.schemas.post import EngagementRead
from app.deps.auth import get_current_user
from app.deps.services import get_aggregator, get_events, get_notifier
from app.services.engagement import EngagementAggregator
from app.services.events import StateEvent, StateEvents, Topic
from app.services.notifier import NotificationEmitter

router = APIRouter(prefix="/posts", tags=["likes"])

@router.post("/{post_id}/likes", response_model=EngagementRead, status_code=status.HTTP_201_CREATED)
def like_post(
    post_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
    events: StateEvents = Depends(get_events),
    notifier: NotificationEmitter = Depends(get_notifier),
):
    post = PostRepository(db).get(post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    LikeRepository(db).add(post_id, current.id)
    summary = aggregator.compute(post_id, current.id)
    events.publish(StateEvent(Topic.LIKES, current.id, post_id=post_id, data={"engagement": summary}))
    notifier.like(actor=current, post_owner_id=post.user_id, post_id=post_id)
    return summary

@router.delete("/{post_id}/likes", response_model=EngagementRead)
def unlike_post(
    post_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
    events: StateEvents = Depends(get_events),
):
    LikeRepository(db).remove(post_id, current.id)
    summary = aggregator.compute(post_id, current.id)
    events.publish(StateEvent(Topic.LIKES, current.id, post_id=post_id, data={"engagement": summary}))
    return summary

@router.get("/{post_id}/engagement", response_model=EngagementRead)
def engagement(
    post_id: str,
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
):
    # Orphaned likes/comments of a deleted post still count here
    return aggregator.summarize(post_id, current.id)
