from typing import Annotated
from datetime import datetime
from pydantic import Field
from app.schemas.base import CamelModel

class DaysGoalSet(CamelModel):
    monthly_target: Annotated[int, Field(ge=1, le=31)]

class DaysGoalRead(CamelModel):
    id: str
    user_id: str
    monthly_target: int
    created_at: datetime
    updated_at: datetime | None = None
