from typing import Annotated
from datetime import datetime
from pydantic import StringConstraints
from app.schemas.base import CamelModel

# trimmed, up to 1000 chars
CommentStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]

class CommentCreate(CamelModel):
    content: CommentStr
    parent_id: str | None = None

class CommentRead(CamelModel):
    id: str
    post_id: str
    user_id: str
    content: str
    parent_id: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
