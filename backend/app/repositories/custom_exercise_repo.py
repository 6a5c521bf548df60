from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from app.models import CustomExercise
from app.repositories.base import BaseRepository

class CustomExerciseRepository(BaseRepository[CustomExercise]):
    model = CustomExercise

    def create(self, user_id: str, *, body_part: str, exercise_name: str) -> CustomExercise:
        ex = CustomExercise(user_id=user_id, body_part=body_part, exercise_name=exercise_name)
        return self.add_and_refresh(ex)

    def get_by_user(self, user_id: str) -> list[CustomExercise]:
        stmt = select(CustomExercise).where(CustomExercise.user_id == user_id).order_by(CustomExercise.created_at.asc())
        return list(self.db.execute(stmt).scalars().all())

    def update(self, exercise_id: str, *, exercise_name: str) -> Optional[CustomExercise]:
        ex = self.get(exercise_id)
        if not ex:
            return None
        ex.exercise_name = exercise_name
        self.db.commit()
        self.db.refresh(ex)
        return ex

    def delete(self, exercise_id: str) -> bool:
        return self.delete_by_id(exercise_id)
