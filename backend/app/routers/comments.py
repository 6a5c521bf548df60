from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import User
from app.repositories.comment_repo import CommentRepository
from app.repositories.post_repo import PostRepository
from app.schemas.comment import CommentCreate, CommentRead
from app.deps.auth import ensure_owner, get_current_user
from app.deps.services import get_aggregator, get_events, get_notifier
from app.services.engagement import EngagementAggregator
from app.services.events import StateEvent, StateEvents, Topic
from app.services.notifier import NotificationEmitter

router = APIRouter(tags=["comments"])

@router.get("/posts/{post_id}/comments", response_model=list[CommentRead])
def list_comments(post_id: str, db: Session = Depends(get_db), _current: User = Depends(get_current_user)):
    return CommentRepository(db).get_by_post(post_id)

@router.post("/posts/{post_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
    events: StateEvents = Depends(get_events),
    notifier: NotificationEmitter = Depends(get_notifier),
):
    post = PostRepository(db).get(post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    repo = CommentRepository(db)
    if payload.parent_id is not None:
        parent = repo.get(payload.parent_id)
        # replies go one level deep and stay on the same post
        if not parent or parent.post_id != post_id or parent.parent_id is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid parent comment")

    comment = repo.add(post_id, current.id, payload.content, parent_id=payload.parent_id)
    summary = aggregator.compute(post_id, current.id)
    events.publish(StateEvent(Topic.COMMENTS, current.id, post_id=post_id, data={"engagement": summary}))
    notifier.comment(actor=current, post_owner_id=post.user_id, post_id=post_id)
    return comment

@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
    events: StateEvents = Depends(get_events),
):
    repo = CommentRepository(db)
    comment = repo.get(comment_id)
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    ensure_owner(comment.user_id, current, "comment")
    post_id = comment.post_id
    repo.delete(comment_id)
    summary = aggregator.compute(post_id, current.id)
    events.publish(StateEvent(Topic.COMMENTS, current.id, post_id=post_id, data={"engagement": summary}))
