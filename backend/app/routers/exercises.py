from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import CustomExercise, User
from app.repositories.custom_exercise_repo import CustomExerciseRepository
from app.schemas.exercise import CustomExerciseCreate, CustomExerciseRead, CustomExerciseUpdate
from app.deps.auth import ensure_owner, get_current_user
from app.deps.services import get_cache, get_events
from app.services.catalog import build_catalog
from app.services.events import StateEvent, StateEvents, Topic
from app.services.local_cache import LocalCache

router = APIRouter(prefix="/exercises", tags=["exercises"])

def custom_pairs(db: Session, cache: LocalCache, user_id: str) -> list[tuple[str, str]]:
    """(body_part, exercise_name) pairs, read through the local cache."""
    rows = cache.get_or_load(
        "customExercises",
        user_id,
        lambda: [[c.body_part, c.exercise_name] for c in CustomExerciseRepository(db).get_by_user(user_id)],
    )
    return [(part, name) for part, name in rows]

def _get_own(repo: CustomExerciseRepository, exercise_id: str, current: User) -> CustomExercise:
    ex = repo.get(exercise_id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    ensure_owner(ex.user_id, current, "exercise")
    return ex

@router.get("/catalog", response_model=dict[str, list[str]])
def catalog(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    cache: LocalCache = Depends(get_cache),
):
    return build_catalog(custom_pairs(db, cache, current.id))

@router.get("/custom", response_model=list[CustomExerciseRead])
def list_custom(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return CustomExerciseRepository(db).get_by_user(current.id)

@router.post("/custom", response_model=CustomExerciseRead, status_code=status.HTTP_201_CREATED)
def create_custom(
    payload: CustomExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    ex = CustomExerciseRepository(db).create(
        current.id, body_part=payload.body_part, exercise_name=payload.exercise_name
    )
    events.publish(StateEvent(Topic.CUSTOM_EXERCISES, current.id))
    return ex

@router.patch("/custom/{exercise_id}", response_model=CustomExerciseRead)
def rename_custom(
    exercise_id: str,
    payload: CustomExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    repo = CustomExerciseRepository(db)
    _get_own(repo, exercise_id, current)
    ex = repo.update(exercise_id, exercise_name=payload.exercise_name)
    events.publish(StateEvent(Topic.CUSTOM_EXERCISES, current.id))
    return ex

@router.delete("/custom/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_custom(
    exercise_id: str,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    events: StateEvents = Depends(get_events),
):
    repo = CustomExerciseRepository(db)
    _get_own(repo, exercise_id, current)
    repo.delete(exercise_id)
    events.publish(StateEvent(Topic.CUSTOM_EXERCISES, current.id))
