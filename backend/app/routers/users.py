from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import User
from app.repositories.post_repo import PostRepository
from app.repositories.user_repo import UserRepository
from app.schemas.post import PostRead
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.deps.auth import get_current_user, get_token_subject
from app.deps.services import get_events
from app.services.events import StateEvent, StateEvents, Topic
from app.settings import get_settings

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: UserCreate,
    db: Session = Depends(get_db),
    subject: str = Depends(get_token_subject),
):
    # A profile can only be created for the identity in the token
    if payload.id != subject:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    repo = UserRepository(db)
    if repo.get(payload.id) or repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="user already exists")
    try:
        user = repo.create(**payload.model_dump())
    except ValueError as e:
        if str(e) == "user_already_exists":
            raise HTTPException(status_code=400, detail="user already exists")
        raise
    return user

@router.get("", response_model=list[UserRead])
def list_users(
    db: Session = Depends(get_db),
    _current: User = Depends(get_current_user),
    limit: int | None = Query(None, ge=1, le=200),
):
    return UserRepository(db).list(limit=limit or get_settings().USER_LIST_LIMIT)

@router.get("/search", response_model=list[UserRead])
def search_users(
    q: str = Query(..., min_length=1, max_length=120),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return UserRepository(db).search(q, exclude_id=current.id, limit=get_settings().USER_LIST_LIMIT)

@router.patch("/me", response_model=UserRead)
def update_profile(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    user = UserRepository(db).update(current.id, **payload.model_dump())
    events.publish(StateEvent(Topic.PROFILE, current.id))
    return user

@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    _current: User = Depends(get_current_user),
):
    user = UserRepository(db).get(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

@router.get("/{user_id}/posts", response_model=list[PostRead])
def list_user_posts(
    user_id: str,
    db: Session = Depends(get_db),
    _current: User = Depends(get_current_user),
):
    return PostRepository(db).get_by_user(user_id)
