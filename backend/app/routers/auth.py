from fastapi import APIRouter, Depends
from app.models import User
from app.schemas.user import UserRead
from app.deps.auth import get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
