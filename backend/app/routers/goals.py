from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models import User
from app.repositories.days_goal_repo import DaysGoalRepository
from app.schemas.goal import DaysGoalRead, DaysGoalSet
from app.deps.auth import get_current_user

router = APIRouter(prefix="/goals", tags=["goals"])

@router.get("/days", response_model=DaysGoalRead)
def get_days_goal(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    goal = DaysGoalRepository(db).get_for_user(current.id)
    if not goal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not set")
    return goal

@router.put("/days", response_model=DaysGoalRead)
def set_days_goal(payload: DaysGoalSet, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return DaysGoalRepository(db).set(current.id, monthly_target=payload.monthly_target)

@router.delete("/days", status_code=status.HTTP_204_NO_CONTENT)
def delete_days_goal(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not DaysGoalRepository(db).delete(current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not set")
