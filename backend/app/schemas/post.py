from typing import Annotated
from datetime import datetime
from pydantic import Field, field_validator
from app.schemas.base import CamelModel

ExerciseName = Annotated[str, Field(max_length=120)]
# Weights and reps travel as the strings the user typed ("62.5", "10", "")
SetValue = Annotated[str, Field(max_length=16)]

class SetEntry(CamelModel):
    weight: SetValue = ""
    reps: SetValue = ""

class ExerciseEntry(CamelModel):
    id: int | str | None = None
    name: ExerciseName
    sets: list[SetEntry] = Field(default_factory=list, max_length=100)
    photo: str | None = None
    memo: Annotated[str, Field(max_length=1000)] | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise name cannot be blank")
        return v2

class PostCreate(CamelModel):
    content: Annotated[str, Field(max_length=2000)] | None = None
    exercise: ExerciseEntry
    timestamp: Annotated[str, Field(max_length=64)] | None = None

class PostUpdate(CamelModel):
    content: Annotated[str, Field(max_length=2000)] | None = None
    exercise: ExerciseEntry | None = None

class PostRead(CamelModel):
    id: str
    user_id: str
    content: str
    exercise: ExerciseEntry
    timestamp: str
    created_at: datetime
    updated_at: datetime | None = None

class EngagementRead(CamelModel):
    post_id: str
    likes_count: int
    comments_count: int
    viewer_has_liked: bool

class FeedItem(PostRead):
    engagement: EngagementRead
