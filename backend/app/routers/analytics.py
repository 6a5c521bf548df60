from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.db import get_db, utcnow
from app.models import User
from app.repositories.days_goal_repo import DaysGoalRepository
from app.repositories.post_repo import PostRepository
from app.schemas.analytics import AnalyticsRead
from app.deps.auth import get_current_user
from app.deps.services import get_cache
from app.routers.exercises import custom_pairs
from app.services.analytics import VolumePeriod, WorkoutEntry, build_report
from app.services.catalog import build_catalog
from app.services.local_cache import LocalCache
from app.settings import get_settings

router = APIRouter(prefix="/analytics", tags=["analytics"])

def _load_history(db: Session, user_id: str) -> list[dict]:
    return [
        {"post_id": p.id, "exercise": p.exercise, "performed_at": p.created_at.isoformat()}
        for p in PostRepository(db).get_by_user(user_id)
    ]

def _parse_goals(raw: list[str]) -> list[tuple[str, float]]:
    goals = []
    for item in raw:
        name, sep, target = item.rpartition(":")
        try:
            value = float(target)
        except ValueError:
            value = None
        if not sep or not name.strip() or value is None or value <= 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid goal '{item}'")
        goals.append((name.strip(), value))
    return goals

@router.get("/me", response_model=AnalyticsRead)
def my_analytics(
    period: VolumePeriod = Query(VolumePeriod.MONTH),
    goal: list[str] = Query([], description="name:targetWeight, repeatable"),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    cache: LocalCache = Depends(get_cache),
):
    history = cache.get_or_load("workoutExercises", current.id, lambda: _load_history(db, current.id))
    entries = [
        WorkoutEntry.from_exercise(h["exercise"], datetime.fromisoformat(h["performed_at"]), h["post_id"])
        for h in history
    ]
    days_goal = DaysGoalRepository(db).get_for_user(current.id)
    monthly_target = days_goal.monthly_target if days_goal else get_settings().DEFAULT_MONTHLY_TARGET
    return build_report(
        entries,
        now=utcnow(),
        monthly_target=monthly_target,
        period=period,
        catalog=build_catalog(custom_pairs(db, cache, current.id)),
        goals=_parse_goals(goal),
    )
