from enum import Enum
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.db import get_db, utcnow
from app.models import Post, User
from app.repositories.follow_repo import FollowRepository
from app.repositories.post_repo import PostRepository
from app.schemas.post import EngagementRead, FeedItem, PostCreate, PostRead, PostUpdate
from app.deps.auth import ensure_owner, get_current_user
from app.deps.services import get_aggregator, get_events
from app.services.engagement import EngagementAggregator
from app.services.events import StateEvent, StateEvents, Topic
from app.services.feed import partition
from app.settings import get_settings

router = APIRouter(prefix="/posts", tags=["posts"])

class FeedScope(str, Enum):
    all = "all"
    following = "following"

def _get_post_or_404(repo: PostRepository, post_id: str) -> Post:
    post = repo.get(post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post

@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    exercise = payload.exercise.model_dump(exclude_none=True)
    content = payload.content or payload.exercise.memo or f"Posted {payload.exercise.name}!"
    timestamp = payload.timestamp or utcnow().strftime("%Y/%m/%d %H:%M")
    post = PostRepository(db).create(current.id, content=content, exercise=exercise, timestamp=timestamp)
    events.publish(StateEvent(Topic.POSTS, current.id, post_id=post.id))
    return post

@router.get("", response_model=list[FeedItem])
def feed(
    scope: FeedScope = Query(FeedScope.all),
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    aggregator: EngagementAggregator = Depends(get_aggregator),
):
    posts = PostRepository(db).get_all(limit=limit or get_settings().FEED_LIMIT)
    views = partition(posts, FollowRepository(db).get_following(current.id))
    selected = views.following if scope == FeedScope.following else views.all
    summaries = aggregator.summarize_many([p.id for p in selected], current.id)
    return [
        FeedItem(**PostRead.model_validate(p).model_dump(), engagement=EngagementRead.model_validate(s))
        for p, s in zip(selected, summaries)
    ]

@router.get("/{post_id}", response_model=PostRead)
def get_post(post_id: str, db: Session = Depends(get_db), _current: User = Depends(get_current_user)):
    return _get_post_or_404(PostRepository(db), post_id)

@router.patch("/{post_id}", response_model=PostRead)
def update_post(
    post_id: str,
    payload: PostUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    repo = PostRepository(db)
    ensure_owner(_get_post_or_404(repo, post_id).user_id, current, "post")
    exercise = payload.exercise.model_dump(exclude_none=True) if payload.exercise else None
    post = repo.update(post_id, content=payload.content, exercise=exercise)
    if not post:
        # deleted between the read and the write
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    events.publish(StateEvent(Topic.POSTS, current.id, post_id=post_id))
    return post

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    repo = PostRepository(db)
    ensure_owner(_get_post_or_404(repo, post_id).user_id, current, "post")
    # TODO: cascade to the post's likes and comments; they are left behind as orphans for now
    repo.delete(post_id)
    events.publish(StateEvent(Topic.POSTS, current.id, post_id=post_id))
