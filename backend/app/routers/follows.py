from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import User
from app.repositories.follow_repo import FollowRepository
from app.repositories.user_repo import UserRepository
from app.schemas.follow import FollowRead, FollowStats
from app.deps.auth import get_current_user
from app.deps.services import get_events, get_notifier
from app.services.events import StateEvent, StateEvents, Topic
from app.services.notifier import NotificationEmitter

router = APIRouter(prefix="/users", tags=["follows"])

FOLLOW_ERRORS = {
    "cannot_follow_self": "cannot follow yourself",
    "invalid_follow_parameters": "invalid follow parameters",
}

def _as_http(e: ValueError) -> HTTPException | None:
    detail = FOLLOW_ERRORS.get(str(e))
    if detail is None:
        return None
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

@router.post("/{user_id}/follow", response_model=FollowRead, status_code=status.HTTP_201_CREATED)
def follow(
    user_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
    notifier: NotificationEmitter = Depends(get_notifier),
):
    if user_id != current.id and not UserRepository(db).get(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    try:
        edge = FollowRepository(db).add(current.id, user_id)
    except ValueError as e:
        http = _as_http(e)
        if http is None:
            raise
        raise http
    events.publish(StateEvent(Topic.FOLLOWING, current.id, data={"following_id": user_id}))
    notifier.follow(actor=current, followed_id=user_id)
    return edge

@router.delete("/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
def unfollow(
    user_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    try:
        FollowRepository(db).remove(current.id, user_id)
    except ValueError as e:
        http = _as_http(e)
        if http is None:
            raise
        raise http
    events.publish(StateEvent(Topic.FOLLOWING, current.id, data={"following_id": user_id}))

@router.get("/{user_id}/followers", response_model=list[str])
def followers(user_id: str, db: Session = Depends(get_db), _current: User = Depends(get_current_user)):
    return FollowRepository(db).get_followers(user_id)

@router.get("/{user_id}/following", response_model=list[str])
def following(user_id: str, db: Session = Depends(get_db), _current: User = Depends(get_current_user)):
    return FollowRepository(db).get_following(user_id)

@router.get("/{user_id}/follow-stats", response_model=FollowStats)
def follow_stats(user_id: str, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = FollowRepository(db)
    # Counts are list lengths, so duplicate edges show up in them
    follower_ids = repo.get_followers(user_id)
    return FollowStats(
        followers=len(follower_ids),
        following=len(repo.get_following(user_id)),
        is_following=current.id in follower_ids,
    )
