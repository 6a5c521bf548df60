from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from app.schemas.base import CamelModel

BodyPartStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]
ExerciseNameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class CustomExerciseCreate(CamelModel):
    body_part: BodyPartStr
    exercise_name: ExerciseNameStr

class CustomExerciseUpdate(CamelModel):
    exercise_name: ExerciseNameStr

class CustomExerciseRead(CamelModel):
    id: str
    user_id: str
    body_part: str
    exercise_name: str
    created_at: datetime
    updated_at: datetime | None = None
